# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

"""Scan results storage uses the passed backend to store and look up scan
results, admitting only complete results and returning only results that can
be reused for a package and scanner."""

import logging

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.package import Package
from scan_result_cache.model.result import Failure, Result, Success
from scan_result_cache.model.scan_result import ScanResult, ScanResultContainer
from scan_result_cache.model.scanner_details import ScannerDetails
from scan_result_cache.storage.backends.abstract_storage_backend import (
    StorageBackend,
)
from scan_result_cache.storage.errors import BackendError, StorageError
from scan_result_cache.storage.matching import provenance_matches, scanner_compatible
from scan_result_cache.storage.validation import admit

# Get application-specific logger
logger = logging.getLogger("scan_result_cache")


class ScanResultsStorage:
    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    def add(self, id: Identifier, result: ScanResult) -> Result[None, StorageError]:
        """Store a scan result for the package with the given identifier.

        Results are appended, earlier results for the same identifier are kept
        even if they were produced by the same scanner for the same provenance.

        Returns:
            Success(None) if the result was stored, Failure(RejectionError) if it
            was not admitted, or Failure(BackendError) if the backend failed
        """
        admission = admit(id, result)
        if isinstance(admission, Failure):
            return admission

        try:
            self.backend.append(id, result)
        except BackendError as e:
            logger.error(f"Failed to store scan result for {id}: {e}")
            return Failure(e)

        logger.info(
            f"Stored scan result for {id} from {result.scanner.name} {result.scanner.version}."
        )
        return Success(None)

    def read_all(self, id: Identifier) -> Result[ScanResultContainer, BackendError]:
        """Return all scan results stored for the identifier.

        An identifier without results yields an empty container, not a failure.
        """
        try:
            results = self.backend.load_all(id)
        except BackendError as e:
            logger.error(f"Failed to read scan results for {id}: {e}")
            return Failure(e)
        return Success(ScanResultContainer(id=id, results=tuple(results)))

    def read_compatible(
        self, package: Package, scanner: ScannerDetails
    ) -> Result[ScanResultContainer, BackendError]:
        """Return the scan results for the package snapshot that were produced by
        a scanner compatible with the given one.

        The order of the returned results is not significant.
        """
        all_results = self.read_all(package.id)
        if isinstance(all_results, Failure):
            return all_results

        matching = tuple(
            result
            for result in all_results.value.results
            if provenance_matches(result.provenance, package)
            and scanner_compatible(result.scanner, scanner)
        )
        logger.debug(
            f"Found {len(matching)} of {len(all_results.value.results)} stored scan results "
            f"for {package.id} usable with {scanner.name} {scanner.version}."
        )
        return Success(ScanResultContainer(id=package.id, results=matching))
