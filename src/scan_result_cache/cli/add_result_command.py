# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

# Command for adding a scan result to the storage

import json
from typing import Annotated, Optional

import typer

from scan_result_cache.adaptors.os import open_file
from scan_result_cache.cli.common import (
    EXIT_REJECTED,
    create_storage,
    exit_with_storage_error,
    init_logging,
    parse_identifier,
)
from scan_result_cache.model.result import Failure
from scan_result_cache.model.serialization import scan_result_from_dict


def add_result(
    identifier: Annotated[
        str,
        typer.Argument(
            metavar="ID",
            help="Identifier of the scanned package as 'type:namespace:name:version'.",
        ),
    ],
    result_file: Annotated[
        str,
        typer.Argument(help="Path to the JSON file containing the scan result."),
    ],
    config_file: Annotated[
        Optional[str],
        typer.Option(
            "--config",
            help="Path to the JSON storage configuration. Defaults to an in-memory storage.",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Log level: debug, info, warning or error."),
    ] = "warning",
) -> None:
    """
    Add a scan result to the storage.

    The result is only stored if it contains a raw result, at least one file
    was scanned and its provenance is known.
    """
    init_logging(log_level)
    id = parse_identifier(identifier)

    try:
        result = scan_result_from_dict(json.loads(open_file(result_file)))
    except FileNotFoundError:
        typer.echo(f"Error: File '{result_file}' not found.", err=True)
        raise typer.Exit(code=EXIT_REJECTED)
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        typer.echo(f"Error: '{result_file}' is not a valid scan result: {e}", err=True)
        raise typer.Exit(code=EXIT_REJECTED)

    storage = create_storage(config_file)
    outcome = storage.add(id, result)
    if isinstance(outcome, Failure):
        exit_with_storage_error(outcome.error)

    typer.echo(f"Stored scan result for '{id}'.")
