# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

"""Here we collect a set of OS wrappers and adaptors to be easily replaced during testing and debugging."""

import os
import tempfile
from typing import Iterator


def list_dir(path: str) -> list[str]:
    return os.listdir(path)


def path_exists(file_path: str) -> bool:
    return os.path.exists(file_path)


def is_directory(path: str) -> bool:
    return os.path.isdir(path)


def create_dirs(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def walk_directory(path: str) -> Iterator[tuple[str, list[str], list[str]]]:
    return os.walk(path)


def expand_user_path(path: str) -> str:
    return os.path.expanduser(path)


def open_file(file_path: str) -> str:
    try:
        with open(file_path, "r", encoding="utf-8") as file:
            return file.read()
    except UnicodeDecodeError:
        try:
            with open(file_path, "r", encoding="utf-16") as file:
                return file.read()
        except UnicodeDecodeError:
            with open(file_path, "r", encoding=None) as file:
                return file.read()


def write_file_atomically(file_path: str, content: str) -> None:
    """Write content to a temporary file next to file_path and move it in place.

    The move is atomic on POSIX and Windows, readers never observe a partially
    written file.
    """
    directory = os.path.dirname(file_path) or "."
    fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as file:
            file.write(content)
        os.replace(temp_path, file_path)
    except BaseException:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise


def path_join(path: str, *paths: str) -> str:
    return os.path.join(path, *paths)
