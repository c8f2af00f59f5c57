# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.provenance import Provenance
from scan_result_cache.model.scanner_details import ScannerDetails


@dataclass(frozen=True, order=True)
class TextLocation:
    path: str
    start_line: int
    end_line: int


@dataclass(frozen=True, order=True)
class LicenseFinding:
    license: str
    location: TextLocation


@dataclass(frozen=True, order=True)
class CopyrightFinding:
    statement: str
    location: TextLocation


class Severity(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    HINT = "HINT"


@dataclass(frozen=True)
class Issue:
    source: str
    message: str
    severity: Severity = Severity.ERROR


def _ordered_set(findings: Iterable[Any]) -> tuple[Any, ...]:
    return tuple(sorted(set(findings)))


@dataclass(frozen=True)
class ScanSummary:
    """Summary of a single scan. A file_count of 0 means nothing was scanned."""

    start_time: datetime
    end_time: datetime
    file_count: int
    package_verification_code: str
    license_findings: tuple[LicenseFinding, ...] = ()
    copyright_findings: tuple[CopyrightFinding, ...] = ()
    issues: tuple[Issue, ...] = ()

    def __post_init__(self) -> None:
        if self.file_count < 0:
            raise ValueError(f"File count cannot be negative: {self.file_count}")
        # findings behave as sorted sets, issues keep their order
        object.__setattr__(
            self, "license_findings", _ordered_set(self.license_findings)
        )
        object.__setattr__(
            self, "copyright_findings", _ordered_set(self.copyright_findings)
        )
        object.__setattr__(self, "issues", tuple(self.issues))

    @property
    def licenses(self) -> list[str]:
        return sorted({finding.license for finding in self.license_findings})


@dataclass(frozen=True)
class ScanResult:
    """The result of scanning one provenance with one scanner.

    raw_result is the native scanner output. It is opaque to the cache, only
    its presence is checked before storing.
    """

    provenance: Provenance
    scanner: ScannerDetails
    summary: ScanSummary
    raw_result: Any = None


@dataclass(frozen=True)
class ScanResultContainer:
    id: Identifier
    results: tuple[ScanResult, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", tuple(self.results))

    def is_empty(self) -> bool:
        return not self.results
