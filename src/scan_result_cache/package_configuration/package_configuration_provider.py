# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

import logging
from collections import defaultdict
from types import MappingProxyType
from typing import Mapping

from scan_result_cache.adaptors.os import is_directory, path_join, walk_directory
from scan_result_cache.config.json_config_parser import JsonConfigParser
from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.provenance import Provenance
from scan_result_cache.package_configuration.package_configuration import (
    PackageConfiguration,
)

# Get application-specific logger
logger = logging.getLogger("scan_result_cache")


def list_configuration_files(directory: str) -> list[str]:
    """List all non-hidden files below directory, skipping hidden directories."""
    if not is_directory(directory):
        return []
    files = []
    for root, dirs, file_names in walk_directory(directory):
        # prune in place so that walk does not descend into hidden directories
        dirs[:] = sorted(d for d in dirs if not d.startswith("."))
        files.extend(
            path_join(root, name)
            for name in sorted(file_names)
            if not name.startswith(".")
        )
    return files


class SimplePackageConfigurationProvider:
    """Looks up the package configuration for a package and provenance.

    The configurations are grouped by identifier once at construction and are
    read-only afterwards.
    """

    def __init__(self, configurations: list[PackageConfiguration] | None = None) -> None:
        grouped: dict[Identifier, list[PackageConfiguration]] = defaultdict(list)
        for configuration in configurations or []:
            grouped[configuration.id].append(configuration)
        self._configurations_by_id: Mapping[
            Identifier, tuple[PackageConfiguration, ...]
        ] = MappingProxyType({id: tuple(entries) for id, entries in grouped.items()})

    @property
    def configurations_by_id(
        self,
    ) -> Mapping[Identifier, tuple[PackageConfiguration, ...]]:
        return self._configurations_by_id

    def get_package_configuration(
        self, id: Identifier, provenance: Provenance
    ) -> PackageConfiguration | None:
        for configuration in self._configurations_by_id.get(id, ()):
            if configuration.matches(id, provenance):
                return configuration
        return None

    @staticmethod
    def from_directory(directory: str) -> "SimplePackageConfigurationProvider":
        """Load every package configuration file found below directory.

        Raises:
            ValueError, json.JSONDecodeError: If a file is not a valid package configuration
        """
        files = list_configuration_files(directory)
        configurations = [
            JsonConfigParser.load_package_configuration(file_path) for file_path in files
        ]
        logger.info(
            f"Loaded {len(configurations)} package configuration(s) from {directory}."
        )
        return SimplePackageConfigurationProvider(configurations)
