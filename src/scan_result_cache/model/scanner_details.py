# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

import logging
from dataclasses import dataclass

import semver

# Get application-specific logger
logger = logging.getLogger("scan_result_cache")


def parse_version(version: str) -> semver.Version | None:
    try:
        return semver.Version.parse(version)
    except (ValueError, TypeError):
        return None


@dataclass(frozen=True)
class ScannerDetails:
    """Identifies the scanner that produced a result."""

    name: str
    version: str  # semantic version
    configuration: str  # opaque fingerprint of the scanner options

    def is_compatible_version(self, other: "ScannerDetails") -> bool:
        """Versions are compatible if major and minor are equal.

        Patch, pre-release and build parts are ignored. Versions that are not
        valid semantic versions are never compatible.
        """
        own_version = parse_version(self.version)
        other_version = parse_version(other.version)
        if own_version is None or other_version is None:
            logger.debug(
                f"Cannot compare scanner versions '{self.version}' and '{other.version}', "
                "treating them as incompatible."
            )
            return False
        return (
            own_version.major == other_version.major
            and own_version.minor == other_version.minor
        )

    def is_compatible(self, other: "ScannerDetails") -> bool:
        return (
            self.name == other.name
            and self.configuration == other.configuration
            and self.is_compatible_version(other)
        )
