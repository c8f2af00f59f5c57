# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

import json
import logging
from dataclasses import fields, replace
from typing import Any

from scan_result_cache.adaptors.os import open_file
from scan_result_cache.config.cli_configs import (
    Config,
    StorageBackendType,
    default_config,
)
from scan_result_cache.model.identifier import Identifier
from scan_result_cache.package_configuration.package_configuration import (
    PackageConfiguration,
    PathExclude,
    PathExcludeReason,
    VcsMatcher,
)

# Get application-specific logger
logger = logging.getLogger("scan_result_cache")


class JsonConfigParser:
    """Parser for JSON configuration files used by scan-result-cache."""

    @staticmethod
    def parse_storage_config(config_dict: dict[str, Any]) -> Config:
        """Overlay the keys of config_dict onto the default configuration.

        Raises:
            ValueError: If a key is unknown or a value is invalid
        """
        known_keys = {config_field.name for config_field in fields(Config)}
        unknown_keys = sorted(set(config_dict) - known_keys)
        if unknown_keys:
            raise ValueError(
                f"Unknown storage configuration keys: {unknown_keys}. Valid keys: {sorted(known_keys)}"
            )

        values = dict(config_dict)
        if "storage_backend" in values:
            try:
                values["storage_backend"] = StorageBackendType(values["storage_backend"])
            except ValueError:
                raise ValueError(
                    f"Invalid storage backend: {values['storage_backend']}. Valid backends: {[t.value for t in StorageBackendType]}"
                )
        config = replace(default_config, **values)

        if config.storage_backend == StorageBackendType.HTTP and not config.http_storage_url:
            raise ValueError("The http storage backend requires http_storage_url.")
        if config.http_timeout_seconds <= 0:
            raise ValueError(
                f"http_timeout_seconds must be positive: {config.http_timeout_seconds}"
            )
        if config.http_max_retries < 1:
            raise ValueError(
                f"http_max_retries must be at least 1: {config.http_max_retries}"
            )
        return config

    @staticmethod
    def load_storage_config(config_file_path: str) -> Config:
        """Load the storage configuration from a JSON file.

        Args:
            config_file_path: Path to the JSON file containing the storage configuration

        Returns:
            The default configuration updated with the values from the file

        Raises:
            FileNotFoundError: If the configuration file is not found
            json.JSONDecodeError: If the JSON file is invalid
            ValueError: If the configuration is invalid
        """
        try:
            config_dict = json.loads(open_file(config_file_path))
            if not isinstance(config_dict, dict):
                raise ValueError("Storage configuration must be a JSON object.")
            return JsonConfigParser.parse_storage_config(config_dict)
        except FileNotFoundError:
            logger.error(f"Storage configuration file not found: {config_file_path}")
            raise
        except json.JSONDecodeError:
            logger.error(
                f"Invalid JSON in storage configuration file: {config_file_path}"
            )
            raise
        except Exception as e:
            logger.error(f"Failed to load storage configuration: {str(e)}")
            raise

    @staticmethod
    def parse_package_configuration(
        config_dict: dict[str, Any],
    ) -> PackageConfiguration:
        """Parse a package configuration record.

        JSON format:
        {
            "id": "Maven:com.example:lib:1.0.0",
            "vcs": {"type": "Git", "url": "https://...", "revision": "v1.0.0"},
            "path_excludes": [{"pattern": "docs/*", "reason": "DOCUMENTATION_OF", "comment": ""}]
        }
        with "source_artifact_url" instead of "vcs" for source artifacts.

        Raises:
            ValueError: If the record is invalid
        """
        if not isinstance(config_dict, dict):
            raise ValueError("Package configuration must be a JSON object.")
        if "id" not in config_dict:
            raise ValueError("Package configuration is missing the 'id' field.")

        vcs = None
        vcs_dict = config_dict.get("vcs")
        if vcs_dict is not None:
            try:
                vcs = VcsMatcher(
                    type=vcs_dict["type"],
                    url=vcs_dict["url"],
                    revision=vcs_dict["revision"],
                )
            except KeyError as e:
                raise ValueError(f"VCS matcher is missing the {e} field.")

        path_excludes = []
        for exclude in config_dict.get("path_excludes", []):
            try:
                reason = PathExcludeReason(exclude["reason"])
            except KeyError as e:
                raise ValueError(f"Path exclude is missing the {e} field.")
            except ValueError:
                raise ValueError(
                    f"Invalid path exclude reason: {exclude['reason']}. Valid reasons: {[r.value for r in PathExcludeReason]}"
                )
            if "pattern" not in exclude:
                raise ValueError("Path exclude is missing the 'pattern' field.")
            path_excludes.append(
                PathExclude(
                    pattern=exclude["pattern"],
                    reason=reason,
                    comment=exclude.get("comment", ""),
                )
            )

        return PackageConfiguration(
            id=Identifier.from_coordinates(config_dict["id"]),
            source_artifact_url=config_dict.get("source_artifact_url"),
            vcs=vcs,
            path_excludes=tuple(path_excludes),
        )

    @staticmethod
    def load_package_configuration(file_path: str) -> PackageConfiguration:
        """Load one package configuration from a JSON file.

        Raises:
            FileNotFoundError: If the file is not found
            json.JSONDecodeError: If the JSON file is invalid
            ValueError: If the package configuration is invalid
        """
        try:
            return JsonConfigParser.parse_package_configuration(
                json.loads(open_file(file_path))
            )
        except FileNotFoundError:
            logger.error(f"Package configuration file not found: {file_path}")
            raise
        except json.JSONDecodeError:
            logger.error(f"Invalid JSON in package configuration file: {file_path}")
            raise
        except Exception as e:
            logger.error(f"Invalid package configuration in {file_path}: {e}")
            raise
