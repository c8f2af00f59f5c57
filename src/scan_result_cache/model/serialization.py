# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

"""Conversion of the model to and from JSON compatible dictionaries.

The layout is shared by all storage backends and by the CLI input files.
"""

from datetime import datetime
from typing import Any

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.provenance import (
    Hash,
    HashAlgorithm,
    Provenance,
    RemoteArtifact,
    VcsInfo,
)
from scan_result_cache.model.scan_result import (
    CopyrightFinding,
    Issue,
    LicenseFinding,
    ScanResult,
    ScanResultContainer,
    ScanSummary,
    Severity,
    TextLocation,
)
from scan_result_cache.model.scanner_details import ScannerDetails


def _datetime_to_json(value: datetime) -> str:
    return value.isoformat()


def _datetime_from_json(value: str) -> datetime:
    return datetime.fromisoformat(value)


def remote_artifact_to_dict(artifact: RemoteArtifact) -> dict[str, Any]:
    return {
        "url": artifact.url,
        "hash": {"value": artifact.hash.value, "algorithm": artifact.hash.algorithm.value},
    }


def remote_artifact_from_dict(data: dict[str, Any]) -> RemoteArtifact:
    hash_data = data["hash"]
    if isinstance(hash_data, str):
        artifact_hash = Hash.create(hash_data)
    else:
        artifact_hash = Hash(
            value=hash_data["value"], algorithm=HashAlgorithm(hash_data["algorithm"])
        )
    return RemoteArtifact(url=data["url"], hash=artifact_hash)


def vcs_info_to_dict(vcs_info: VcsInfo) -> dict[str, Any]:
    return {
        "type": vcs_info.type,
        "url": vcs_info.url,
        "revision": vcs_info.revision,
        "resolved_revision": vcs_info.resolved_revision,
        "path": vcs_info.path,
    }


def vcs_info_from_dict(data: dict[str, Any]) -> VcsInfo:
    return VcsInfo(
        type=data["type"],
        url=data["url"],
        revision=data.get("revision") or "",
        resolved_revision=data.get("resolved_revision"),
        path=data.get("path") or "",
    )


def provenance_to_dict(provenance: Provenance) -> dict[str, Any]:
    return {
        "download_time": _datetime_to_json(provenance.download_time),
        "source_artifact": (
            remote_artifact_to_dict(provenance.source_artifact)
            if provenance.source_artifact is not None
            else None
        ),
        "vcs_info": (
            vcs_info_to_dict(provenance.vcs_info)
            if provenance.vcs_info is not None
            else None
        ),
        "original_vcs_info": (
            vcs_info_to_dict(provenance.original_vcs_info)
            if provenance.original_vcs_info is not None
            else None
        ),
    }


def provenance_from_dict(data: dict[str, Any]) -> Provenance:
    source_artifact = data.get("source_artifact")
    vcs_info = data.get("vcs_info")
    original_vcs_info = data.get("original_vcs_info")
    return Provenance(
        download_time=_datetime_from_json(data["download_time"]),
        source_artifact=(
            remote_artifact_from_dict(source_artifact) if source_artifact else None
        ),
        vcs_info=vcs_info_from_dict(vcs_info) if vcs_info else None,
        original_vcs_info=(
            vcs_info_from_dict(original_vcs_info) if original_vcs_info else None
        ),
    )


def scanner_details_to_dict(scanner: ScannerDetails) -> dict[str, Any]:
    return {
        "name": scanner.name,
        "version": scanner.version,
        "configuration": scanner.configuration,
    }


def scanner_details_from_dict(data: dict[str, Any]) -> ScannerDetails:
    return ScannerDetails(
        name=data["name"],
        version=data["version"],
        configuration=data.get("configuration", ""),
    )


def _location_to_dict(location: TextLocation) -> dict[str, Any]:
    return {
        "path": location.path,
        "start_line": location.start_line,
        "end_line": location.end_line,
    }


def _location_from_dict(data: dict[str, Any]) -> TextLocation:
    return TextLocation(
        path=data["path"], start_line=data["start_line"], end_line=data["end_line"]
    )


def scan_summary_to_dict(summary: ScanSummary) -> dict[str, Any]:
    return {
        "start_time": _datetime_to_json(summary.start_time),
        "end_time": _datetime_to_json(summary.end_time),
        "file_count": summary.file_count,
        "package_verification_code": summary.package_verification_code,
        "licenses": [
            {"license": finding.license, "location": _location_to_dict(finding.location)}
            for finding in summary.license_findings
        ],
        "copyrights": [
            {
                "statement": finding.statement,
                "location": _location_to_dict(finding.location),
            }
            for finding in summary.copyright_findings
        ],
        "issues": [
            {
                "source": issue.source,
                "message": issue.message,
                "severity": issue.severity.value,
            }
            for issue in summary.issues
        ],
    }


def scan_summary_from_dict(data: dict[str, Any]) -> ScanSummary:
    return ScanSummary(
        start_time=_datetime_from_json(data["start_time"]),
        end_time=_datetime_from_json(data["end_time"]),
        file_count=data["file_count"],
        package_verification_code=data.get("package_verification_code", ""),
        license_findings=tuple(
            LicenseFinding(
                license=finding["license"],
                location=_location_from_dict(finding["location"]),
            )
            for finding in data.get("licenses", [])
        ),
        copyright_findings=tuple(
            CopyrightFinding(
                statement=finding["statement"],
                location=_location_from_dict(finding["location"]),
            )
            for finding in data.get("copyrights", [])
        ),
        issues=tuple(
            Issue(
                source=issue["source"],
                message=issue["message"],
                severity=Severity(issue.get("severity", Severity.ERROR.value)),
            )
            for issue in data.get("issues", [])
        ),
    )


def scan_result_to_dict(result: ScanResult) -> dict[str, Any]:
    return {
        "provenance": provenance_to_dict(result.provenance),
        "scanner": scanner_details_to_dict(result.scanner),
        "summary": scan_summary_to_dict(result.summary),
        "raw_result": result.raw_result,
    }


def scan_result_from_dict(data: dict[str, Any]) -> ScanResult:
    """Build a ScanResult from its dictionary form.

    Raises:
        ValueError, KeyError, TypeError: If the dictionary does not describe a scan result
    """
    if not isinstance(data, dict):
        raise TypeError(f"Expected a scan result object, got {type(data).__name__}")
    return ScanResult(
        provenance=provenance_from_dict(data["provenance"]),
        scanner=scanner_details_from_dict(data["scanner"]),
        summary=scan_summary_from_dict(data["summary"]),
        raw_result=data.get("raw_result"),
    )


def scan_result_container_to_dict(container: ScanResultContainer) -> dict[str, Any]:
    return {
        "id": container.id.to_coordinates(),
        "results": [scan_result_to_dict(result) for result in container.results],
    }


def scan_result_container_from_dict(data: dict[str, Any]) -> ScanResultContainer:
    return ScanResultContainer(
        id=Identifier.from_coordinates(data["id"]),
        results=tuple(scan_result_from_dict(result) for result in data["results"]),
    )
