# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

from dataclasses import dataclass, field
from enum import Enum
from fnmatch import fnmatchcase

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.provenance import Provenance


class PathExcludeReason(Enum):
    """
    Enum for the reasons why a path is excluded from the scan results.
    """

    BUILD_TOOL_OF = "BUILD_TOOL_OF"
    DATA_FILE_OF = "DATA_FILE_OF"
    DOCUMENTATION_OF = "DOCUMENTATION_OF"
    EXAMPLE_OF = "EXAMPLE_OF"
    OPTIONAL_COMPONENT_OF = "OPTIONAL_COMPONENT_OF"
    OTHER = "OTHER"
    PROVIDED_BY = "PROVIDED_BY"
    TEST_OF = "TEST_OF"
    TEST_TOOL_OF = "TEST_TOOL_OF"


@dataclass(frozen=True)
class PathExclude:
    pattern: str  # glob, '*' also matches across directories
    reason: PathExcludeReason
    comment: str = ""

    def matches(self, path: str) -> bool:
        return fnmatchcase(path, self.pattern)


@dataclass(frozen=True)
class VcsMatcher:
    type: str
    url: str
    revision: str

    def __post_init__(self) -> None:
        if not self.url.strip() or not self.revision.strip():
            raise ValueError("A VCS matcher requires a non-blank url and revision.")


@dataclass(frozen=True)
class PackageConfiguration:
    """Configuration of path excludes for one package at one exact provenance."""

    id: Identifier
    source_artifact_url: str | None = None
    vcs: VcsMatcher | None = None
    path_excludes: tuple[PathExclude, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if (self.source_artifact_url is None) == (self.vcs is None):
            raise ValueError(
                "A package configuration can either apply to a source artifact or to a VCS, not to both."
            )
        object.__setattr__(self, "path_excludes", tuple(self.path_excludes))

    def matches(self, id: Identifier, provenance: Provenance) -> bool:
        # no leniency here: excludes must only apply to the exact snapshot
        if id != self.id:
            return False

        if self.vcs is not None:
            vcs_info = provenance.vcs_info
            if vcs_info is None:
                return False
            return (
                self.vcs.type == vcs_info.type
                and self.vcs.url == vcs_info.url
                and self.vcs.revision == vcs_info.revision
            )

        source_artifact_url = (
            provenance.source_artifact.url
            if provenance.source_artifact is not None
            else None
        )
        return self.source_artifact_url == source_artifact_url

    def is_path_excluded(self, path: str) -> bool:
        return any(path_exclude.matches(path) for path_exclude in self.path_excludes)
