# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

from dataclasses import replace

import pytest
from scan_result_builders import (
    DOWNLOAD_TIME_1,
    ID,
    PROVENANCE_EMPTY,
    PROVENANCE_WITH_ORIGINAL_VCS_INFO,
    PROVENANCE_WITH_SOURCE_ARTIFACT,
    PROVENANCE_WITH_VCS_INFO,
    SOURCE_ARTIFACT,
    VCS,
    VCS_WITHOUT_REVISION,
)

from scan_result_cache.model.package import Package
from scan_result_cache.model.provenance import (
    Hash,
    HashAlgorithm,
    Provenance,
    RemoteArtifact,
    VcsInfo,
    VcsType,
)
from scan_result_cache.model.serialization import (
    provenance_from_dict,
    remote_artifact_from_dict,
)
from scan_result_cache.storage.matching import provenance_matches


def test_source_artifact_matches_same_url_and_hash() -> None:
    package = Package(id=ID, source_artifact=SOURCE_ARTIFACT)

    assert provenance_matches(PROVENANCE_WITH_SOURCE_ARTIFACT, package)


def test_source_artifact_with_other_hash_does_not_match() -> None:
    package = Package(
        id=ID,
        source_artifact=replace(
            SOURCE_ARTIFACT, hash=Hash.create("ffffffffffffffffffffffffffffffffffffffff")
        ),
    )

    assert not provenance_matches(PROVENANCE_WITH_SOURCE_ARTIFACT, package)


def test_source_artifact_with_other_url_does_not_match() -> None:
    package = Package(id=ID, source_artifact=replace(SOURCE_ARTIFACT, url="other-url"))

    assert not provenance_matches(PROVENANCE_WITH_SOURCE_ARTIFACT, package)


def test_source_artifact_request_does_not_match_vcs_result() -> None:
    package = Package(id=ID, source_artifact=SOURCE_ARTIFACT)

    assert not provenance_matches(PROVENANCE_WITH_VCS_INFO, package)


def test_vcs_with_revision_matches_ignoring_resolved_revision() -> None:
    package = Package(id=ID, vcs=replace(VCS, resolved_revision="somethingElse"))

    assert provenance_matches(PROVENANCE_WITH_VCS_INFO, package)


def test_vcs_with_other_revision_does_not_match() -> None:
    package = Package(id=ID, vcs=replace(VCS, revision="revision2"))

    assert not provenance_matches(PROVENANCE_WITH_VCS_INFO, package)


def test_vcs_with_other_url_or_type_does_not_match() -> None:
    assert not provenance_matches(
        PROVENANCE_WITH_VCS_INFO, Package(id=ID, vcs=replace(VCS, url="other-url"))
    )
    assert not provenance_matches(
        PROVENANCE_WITH_VCS_INFO, Package(id=ID, vcs=replace(VCS, type="Mercurial"))
    )


def test_vcs_without_revision_matches_original_vcs_info() -> None:
    package = Package(id=ID, vcs=VCS_WITHOUT_REVISION)

    assert provenance_matches(PROVENANCE_WITH_ORIGINAL_VCS_INFO, package)


def test_vcs_without_revision_matches_any_resolved_commit() -> None:
    package = Package(id=ID, vcs=VCS_WITHOUT_REVISION)
    later_scan = replace(
        PROVENANCE_WITH_ORIGINAL_VCS_INFO,
        vcs_info=replace(VCS, resolved_revision="anotherCommit"),
    )

    assert provenance_matches(later_scan, package)


def test_vcs_without_revision_requires_original_vcs_info() -> None:
    package = Package(id=ID, vcs=VCS_WITHOUT_REVISION)

    assert not provenance_matches(PROVENANCE_WITH_VCS_INFO, package)


def test_vcs_without_revision_does_not_match_original_with_revision() -> None:
    package = Package(id=ID, vcs=VCS_WITHOUT_REVISION)
    stored = Provenance(
        download_time=DOWNLOAD_TIME_1, vcs_info=VCS, original_vcs_info=VCS
    )

    assert not provenance_matches(stored, package)


def test_vcs_without_revision_matches_stored_null_revision() -> None:
    stored = provenance_from_dict(
        {
            "download_time": DOWNLOAD_TIME_1.isoformat(),
            "vcs_info": {
                "type": VcsType.GIT,
                "url": "https://github.com/org/repo.git",
                "revision": "main",
                "resolved_revision": "abc123",
            },
            "original_vcs_info": {
                "type": VcsType.GIT,
                "url": "https://github.com/org/repo.git",
                "revision": None,
            },
        }
    )
    package = Package(
        id=ID, vcs=VcsInfo(VcsType.GIT, "https://github.com/org/repo.git", "")
    )

    assert stored.original_vcs_info is not None
    assert stored.original_vcs_info.revision == ""
    assert provenance_matches(stored, package)


@pytest.mark.parametrize("requested_revision", ["", " ", "\t\n"])
@pytest.mark.parametrize("stored_revision", ["", "  "])
def test_blank_revisions_are_equivalent_on_both_sides(
    requested_revision: str, stored_revision: str
) -> None:
    stored = replace(
        PROVENANCE_WITH_ORIGINAL_VCS_INFO,
        original_vcs_info=replace(VCS_WITHOUT_REVISION, revision=stored_revision),
    )
    package = Package(id=ID, vcs=replace(VCS_WITHOUT_REVISION, revision=requested_revision))

    assert provenance_matches(stored, package)


def test_blank_revision_still_requires_same_type_and_url() -> None:
    assert not provenance_matches(
        PROVENANCE_WITH_ORIGINAL_VCS_INFO,
        Package(id=ID, vcs=replace(VCS_WITHOUT_REVISION, url="other-url")),
    )
    assert not provenance_matches(
        PROVENANCE_WITH_ORIGINAL_VCS_INFO,
        Package(id=ID, vcs=replace(VCS_WITHOUT_REVISION, type=VcsType.MERCURIAL)),
    )


def test_stored_hash_matches_request_regardless_of_case() -> None:
    digest = "ABCDEF0123456789ABCDEF0123456789ABCDEF01"
    stored = Provenance(
        download_time=DOWNLOAD_TIME_1,
        source_artifact=remote_artifact_from_dict(
            {"url": "url", "hash": {"value": digest, "algorithm": "SHA-1"}}
        ),
    )
    package = Package(id=ID, source_artifact=RemoteArtifact("url", Hash.create(digest)))

    assert provenance_matches(stored, package)
    assert provenance_matches(
        stored,
        Package(
            id=ID,
            source_artifact=RemoteArtifact(
                "url", Hash(digest.lower(), HashAlgorithm.SHA1)
            ),
        ),
    )


def test_explicit_revision_does_not_fall_back_to_original_vcs_info() -> None:
    package = Package(id=ID, vcs=replace(VCS, revision="other"))

    assert not provenance_matches(PROVENANCE_WITH_ORIGINAL_VCS_INFO, package)


def test_package_with_both_locations_matches_either() -> None:
    package = Package(id=ID, source_artifact=SOURCE_ARTIFACT, vcs=VCS)

    assert provenance_matches(PROVENANCE_WITH_SOURCE_ARTIFACT, package)
    assert provenance_matches(PROVENANCE_WITH_VCS_INFO, package)


def test_empty_provenance_never_matches() -> None:
    package = Package(id=ID, source_artifact=SOURCE_ARTIFACT, vcs=VCS_WITHOUT_REVISION)
    stored = replace(PROVENANCE_EMPTY, original_vcs_info=VCS_WITHOUT_REVISION)

    assert not provenance_matches(stored, package)
