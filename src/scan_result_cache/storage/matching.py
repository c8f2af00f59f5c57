# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

"""Decides which stored scan results can be reused for a package and a scanner."""

import logging

from scan_result_cache.model.package import Package
from scan_result_cache.model.provenance import Provenance
from scan_result_cache.model.scanner_details import ScannerDetails

# Get application-specific logger
logger = logging.getLogger("scan_result_cache")


def _source_artifact_matches(stored: Provenance, package: Package) -> bool:
    if package.source_artifact is None or stored.source_artifact is None:
        return False
    return (
        stored.source_artifact.url == package.source_artifact.url
        and stored.source_artifact.hash == package.source_artifact.hash
    )


def _vcs_matches(stored: Provenance, package: Package) -> bool:
    if package.vcs is None or stored.vcs_info is None:
        return False

    if package.vcs.revision.strip():
        # resolved revisions are ignored, the requested revision identifies the snapshot
        return stored.vcs_info.matches_location(package.vcs)

    # Without a revision the default branch was resolved at scan time, so the
    # scanned commit differs between runs. Compare against what was requested.
    original = stored.original_vcs_info
    if original is None:
        return False
    return (
        original.type == package.vcs.type
        and original.url == package.vcs.url
        and not (original.revision or "").strip()
    )


def provenance_matches(stored: Provenance, package: Package) -> bool:
    """Check if a stored provenance describes the source code of the package.

    A package may know both its source artifact and its VCS location, a match
    of either is enough.
    """
    if stored.is_empty():
        return False
    return _source_artifact_matches(stored, package) or _vcs_matches(stored, package)


def scanner_compatible(stored: ScannerDetails, wanted: ScannerDetails) -> bool:
    compatible = wanted.is_compatible(stored)
    if not compatible:
        logger.debug(
            f"Scanner {stored.name} {stored.version} is not compatible with "
            f"{wanted.name} {wanted.version}."
        )
    return compatible
