# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

# Helpers shared by the CLI commands

import json
import logging
from typing import Any, NoReturn

import typer

from scan_result_cache.config.cli_configs import StorageBackendType, default_config
from scan_result_cache.config.json_config_parser import JsonConfigParser
from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.provenance import (
    Hash,
    RemoteArtifact,
    VcsInfo,
    VcsType,
)
from scan_result_cache.storage.backends.backend_factory import (
    create_storage_backend,
)
from scan_result_cache.storage.errors import BackendUnavailableError, StorageError
from scan_result_cache.storage.scan_results_storage import ScanResultsStorage
from scan_result_cache.utils.logging import parse_log_level, setup_logging

# Get application-specific logger
logger = logging.getLogger("scan_result_cache")

EXIT_REJECTED = 1
EXIT_BACKEND_FAILURE = 2


def init_logging(log_level: str) -> None:
    try:
        setup_logging(parse_log_level(log_level))
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level")


def parse_identifier(coordinates: str) -> Identifier:
    try:
        return Identifier.from_coordinates(coordinates)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="ID")


def create_storage(config_file: str | None) -> ScanResultsStorage:
    try:
        config = (
            JsonConfigParser.load_storage_config(config_file)
            if config_file
            else default_config
        )
        if config.storage_backend == StorageBackendType.MEMORY:
            logger.warning(
                "Using the in-memory storage, scan results are lost when the command exits. "
                "Pass --config to use a persistent storage."
            )
        return ScanResultsStorage(create_storage_backend(config))
    except BackendUnavailableError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_BACKEND_FAILURE)
    except (OSError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_REJECTED)


def exit_with_storage_error(error: StorageError) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    if isinstance(error, BackendUnavailableError):
        raise typer.Exit(code=EXIT_BACKEND_FAILURE)
    raise typer.Exit(code=EXIT_REJECTED)


def build_source_artifact(
    url: str | None, hash_value: str | None
) -> RemoteArtifact | None:
    if url is None:
        if hash_value is not None:
            raise typer.BadParameter(
                "--source-artifact-hash requires --source-artifact-url"
            )
        return None
    return RemoteArtifact(url=url, hash=Hash.create(hash_value or ""))


def build_vcs_info(
    vcs_type: str | None, url: str | None, revision: str
) -> VcsInfo | None:
    if url is None:
        if vcs_type is not None or revision:
            raise typer.BadParameter("--vcs-type and --vcs-revision require --vcs-url")
        return None
    return VcsInfo(type=vcs_type or VcsType.UNKNOWN, url=url, revision=revision)


def echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))
