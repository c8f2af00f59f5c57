# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

import json

import pytest
from scan_result_builders import (
    ID,
    PROVENANCE_WITH_ORIGINAL_VCS_INFO,
    SCAN_SUMMARY_WITH_FILES,
    scan_result,
)

from scan_result_cache.model.provenance import Hash
from scan_result_cache.model.scan_result import ScanResultContainer
from scan_result_cache.model.serialization import (
    remote_artifact_from_dict,
    scan_result_container_from_dict,
    scan_result_container_to_dict,
    scan_result_from_dict,
    scan_result_to_dict,
)


def test_scan_result_survives_json() -> None:
    result = scan_result(PROVENANCE_WITH_ORIGINAL_VCS_INFO)

    data = json.loads(json.dumps(scan_result_to_dict(result)))

    assert scan_result_from_dict(data) == result
    assert data["provenance"]["source_artifact"] is None
    assert data["provenance"]["original_vcs_info"]["revision"] == ""
    assert data["summary"]["licenses"][0] == {
        "license": "license 1.1",
        "location": {"path": "fakepath", "start_line": 13, "end_line": 21},
    }
    assert data["summary"]["issues"][0]["severity"] == "ERROR"


def test_container_uses_identifier_coordinates() -> None:
    container = ScanResultContainer(id=ID, results=(scan_result(),))

    data = scan_result_container_to_dict(container)

    assert data["id"] == "type:namespace:name:version"
    assert scan_result_container_from_dict(data) == container


def test_source_artifact_hash_may_be_a_plain_digest() -> None:
    artifact = remote_artifact_from_dict(
        {"url": "https://example.com/a.tgz", "hash": "0123456789abcdef0123456789abcdef01234567"}
    )

    assert artifact.hash == Hash.create("0123456789abcdef0123456789abcdef01234567")


def test_optional_summary_fields_have_defaults() -> None:
    data = scan_result_to_dict(scan_result())
    for key in ("licenses", "copyrights", "issues", "package_verification_code"):
        del data["summary"][key]

    summary = scan_result_from_dict(data).summary

    assert summary.file_count == SCAN_SUMMARY_WITH_FILES.file_count
    assert summary.license_findings == ()
    assert summary.package_verification_code == ""


@pytest.mark.parametrize(
    "data",
    [[], {"provenance": {}}, {"provenance": "x", "scanner": {}, "summary": {}}],
)
def test_invalid_documents_are_rejected(data: object) -> None:
    with pytest.raises((ValueError, KeyError, TypeError, AttributeError)):
        scan_result_from_dict(data)  # type: ignore[arg-type]
