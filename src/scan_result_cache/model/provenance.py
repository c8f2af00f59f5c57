# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class HashAlgorithm(Enum):
    UNKNOWN = "UNKNOWN"
    MD5 = "MD5"
    SHA1 = "SHA-1"
    SHA256 = "SHA-256"
    SHA384 = "SHA-384"
    SHA512 = "SHA-512"


# hex digest length -> algorithm
_ALGORITHMS_BY_DIGEST_LENGTH = {
    32: HashAlgorithm.MD5,
    40: HashAlgorithm.SHA1,
    64: HashAlgorithm.SHA256,
    96: HashAlgorithm.SHA384,
    128: HashAlgorithm.SHA512,
}


@dataclass(frozen=True)
class Hash:
    value: str
    algorithm: HashAlgorithm

    def __post_init__(self) -> None:
        # hex digests compare case-insensitively
        object.__setattr__(self, "value", self.value.lower())

    @staticmethod
    def create(value: str) -> "Hash":
        """Create a hash from a hex digest, guessing the algorithm from its length."""
        algorithm = _ALGORITHMS_BY_DIGEST_LENGTH.get(len(value), HashAlgorithm.UNKNOWN)
        return Hash(value=value, algorithm=algorithm)


@dataclass(frozen=True)
class RemoteArtifact:
    """A fixed, immutable download location of a source artifact."""

    url: str
    hash: Hash


class VcsType:
    """Well known VCS type names. Any other string is accepted as well."""

    GIT = "Git"
    GIT_REPO = "GitRepo"
    MERCURIAL = "Mercurial"
    SUBVERSION = "Subversion"
    CVS = "CVS"
    UNKNOWN = ""


@dataclass(frozen=True)
class VcsInfo:
    """A reference into a version control system.

    revision is what was requested (a branch, tag, commit or empty for the
    default branch), resolved_revision is the commit that was checked out.
    """

    type: str
    url: str
    revision: str
    resolved_revision: str | None = None
    path: str = ""

    def matches_location(self, other: "VcsInfo") -> bool:
        """Compare type, url and requested revision, ignoring the resolved revision."""
        return (
            self.type == other.type
            and self.url == other.url
            and self.revision == other.revision
        )


@dataclass(frozen=True)
class Provenance:
    """Describes which snapshot of the source code was scanned.

    Exactly one of source_artifact and vcs_info is set for a provenance that
    can be stored. original_vcs_info holds the VCS information as requested by
    the package manager, before the revision was detected and written into
    vcs_info.
    """

    download_time: datetime
    source_artifact: RemoteArtifact | None = None
    vcs_info: VcsInfo | None = None
    original_vcs_info: VcsInfo | None = None

    def __post_init__(self) -> None:
        if self.source_artifact is not None and self.vcs_info is not None:
            raise ValueError(
                "A provenance can either have a source artifact or VCS info, not both."
            )

    def is_empty(self) -> bool:
        return self.source_artifact is None and self.vcs_info is None
