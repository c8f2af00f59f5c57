# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

# Commands for reading scan results from the storage

from typing import Annotated, Optional

import typer

from scan_result_cache.cli.common import (
    build_source_artifact,
    build_vcs_info,
    create_storage,
    echo_json,
    exit_with_storage_error,
    init_logging,
    parse_identifier,
)
from scan_result_cache.model.package import Package
from scan_result_cache.model.provenance import VcsType
from scan_result_cache.model.result import Failure
from scan_result_cache.model.scanner_details import ScannerDetails
from scan_result_cache.model.serialization import scan_result_container_to_dict

ConfigOption = Annotated[
    Optional[str],
    typer.Option(
        "--config",
        help="Path to the JSON storage configuration. Defaults to an in-memory storage.",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Log level: debug, info, warning or error."),
]
IdentifierArgument = Annotated[
    str,
    typer.Argument(
        metavar="ID",
        help="Identifier of the package as 'type:namespace:name:version'.",
    ),
]


def read_results(
    identifier: IdentifierArgument,
    config_file: ConfigOption = None,
    log_level: LogLevelOption = "warning",
) -> None:
    """
    Print all scan results stored for a package as JSON.
    """
    init_logging(log_level)
    id = parse_identifier(identifier)

    outcome = create_storage(config_file).read_all(id)
    if isinstance(outcome, Failure):
        exit_with_storage_error(outcome.error)
    echo_json(scan_result_container_to_dict(outcome.value))


def find_results(
    identifier: IdentifierArgument,
    scanner_name: Annotated[
        str, typer.Option("--scanner-name", help="Name of the scanner.")
    ],
    scanner_version: Annotated[
        str,
        typer.Option("--scanner-version", help="Semantic version of the scanner."),
    ],
    scanner_configuration: Annotated[
        str,
        typer.Option(
            "--scanner-configuration", help="Configuration string of the scanner."
        ),
    ] = "",
    source_artifact_url: Annotated[
        Optional[str],
        typer.Option("--source-artifact-url", help="URL of the source artifact."),
    ] = None,
    source_artifact_hash: Annotated[
        Optional[str],
        typer.Option(
            "--source-artifact-hash", help="Hex digest of the source artifact."
        ),
    ] = None,
    vcs_type: Annotated[
        Optional[str],
        typer.Option("--vcs-type", help=f"Type of the VCS, e.g. {VcsType.GIT}."),
    ] = None,
    vcs_url: Annotated[
        Optional[str], typer.Option("--vcs-url", help="URL of the repository.")
    ] = None,
    vcs_revision: Annotated[
        str,
        typer.Option(
            "--vcs-revision",
            help="Requested revision. Leave empty if the default branch is scanned.",
        ),
    ] = "",
    config_file: ConfigOption = None,
    log_level: LogLevelOption = "warning",
) -> None:
    """
    Print the stored scan results that can be reused for a package snapshot
    and scanner as JSON.
    """
    init_logging(log_level)
    id = parse_identifier(identifier)
    package = Package(
        id=id,
        source_artifact=build_source_artifact(source_artifact_url, source_artifact_hash),
        vcs=build_vcs_info(vcs_type, vcs_url, vcs_revision),
    )
    if package.source_artifact is None and package.vcs is None:
        raise typer.BadParameter(
            "Either --source-artifact-url or --vcs-url must be given."
        )
    scanner = ScannerDetails(
        name=scanner_name,
        version=scanner_version,
        configuration=scanner_configuration,
    )

    outcome = create_storage(config_file).read_compatible(package, scanner)
    if isinstance(outcome, Failure):
        exit_with_storage_error(outcome.error)
    echo_json(scan_result_container_to_dict(outcome.value))
