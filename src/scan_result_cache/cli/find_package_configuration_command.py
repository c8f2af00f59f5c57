# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

# Command for looking up the package configuration of a package snapshot

from typing import Annotated, Optional

import typer

from scan_result_cache.adaptors.datetime import get_datetime_now
from scan_result_cache.cli.common import (
    EXIT_REJECTED,
    build_source_artifact,
    build_vcs_info,
    echo_json,
    init_logging,
    parse_identifier,
)
from scan_result_cache.model.provenance import Provenance, VcsType
from scan_result_cache.package_configuration.package_configuration_provider import (
    SimplePackageConfigurationProvider,
)


def find_package_configuration(
    configuration_directory: Annotated[
        str,
        typer.Argument(
            help="Directory containing package configuration JSON files, searched recursively."
        ),
    ],
    identifier: Annotated[
        str,
        typer.Argument(
            metavar="ID",
            help="Identifier of the package as 'type:namespace:name:version'.",
        ),
    ],
    source_artifact_url: Annotated[
        Optional[str],
        typer.Option("--source-artifact-url", help="URL of the source artifact."),
    ] = None,
    vcs_type: Annotated[
        Optional[str],
        typer.Option("--vcs-type", help=f"Type of the VCS, e.g. {VcsType.GIT}."),
    ] = None,
    vcs_url: Annotated[
        Optional[str], typer.Option("--vcs-url", help="URL of the repository.")
    ] = None,
    vcs_revision: Annotated[
        str, typer.Option("--vcs-revision", help="Revision of the repository.")
    ] = "",
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Log level: debug, info, warning or error."),
    ] = "warning",
) -> None:
    """
    Print the path excludes configured for a package snapshot as JSON.
    """
    init_logging(log_level)
    id = parse_identifier(identifier)
    source_artifact = build_source_artifact(source_artifact_url, None)
    vcs_info = build_vcs_info(vcs_type, vcs_url, vcs_revision)
    if (source_artifact is None) == (vcs_info is None):
        raise typer.BadParameter(
            "Exactly one of --source-artifact-url and --vcs-url must be given."
        )
    provenance = Provenance(
        download_time=get_datetime_now(),
        source_artifact=source_artifact,
        vcs_info=vcs_info,
    )

    try:
        provider = SimplePackageConfigurationProvider.from_directory(
            configuration_directory
        )
    except (OSError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_REJECTED)

    configuration = provider.get_package_configuration(id, provenance)
    if configuration is None:
        typer.echo(f"No package configuration found for '{id}'.", err=True)
        raise typer.Exit(code=EXIT_REJECTED)

    echo_json(
        {
            "id": configuration.id.to_coordinates(),
            "path_excludes": [
                {
                    "pattern": path_exclude.pattern,
                    "reason": path_exclude.reason.value,
                    "comment": path_exclude.comment,
                }
                for path_exclude in configuration.path_excludes
            ],
        }
    )
