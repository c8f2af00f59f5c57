# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.
import logging
import sys

APP_LOGGER_NAME = "scan_result_cache"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class ColoredFormatter(logging.Formatter):

    grey = "\x1b[38;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"
    log_format = "%(asctime)s - %(levelname)s - %(message)s (%(filename)s:%(lineno)d)"

    FORMATS = {
        logging.DEBUG: grey + log_format + reset,
        logging.INFO: grey + log_format + reset,
        logging.WARNING: yellow + log_format + reset,
        logging.ERROR: red + log_format + reset,
        logging.CRITICAL: bold_red + log_format + reset,
    }

    def format(self, record: logging.LogRecord) -> str:
        log_fmt = self.FORMATS.get(record.levelno)
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


def parse_log_level(level_name: str) -> int:
    try:
        return LOG_LEVELS[level_name.lower()]
    except KeyError:
        raise ValueError(
            f"Invalid log level: {level_name}. Valid levels: {list(LOG_LEVELS)}"
        )


def setup_logging(level: int) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # the CLI may be invoked several times in one process, stderr may have changed since
    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, ColoredFormatter):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter())
    root_logger.addHandler(console_handler)

    # requests' connection pool is chatty at debug level
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))
