# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

# Main entry point for the scan-result-cache CLI tool

import typer

from scan_result_cache.cli.add_result_command import add_result
from scan_result_cache.cli.find_package_configuration_command import (
    find_package_configuration,
)
from scan_result_cache.cli.read_results_command import find_results, read_results

app = typer.Typer(add_completion=False)
app.command()(add_result)
app.command()(read_results)
app.command()(find_results)
app.command()(find_package_configuration)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        ctx.exit(2)


if __name__ == "__main__":
    app()
