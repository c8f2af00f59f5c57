# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

"""Checks a scan result must pass before it is written to the storage."""

import logging
from typing import Any

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.result import Failure, Result, Success
from scan_result_cache.model.scan_result import ScanResult
from scan_result_cache.storage.errors import RejectionError

# Get application-specific logger
logger = logging.getLogger("scan_result_cache")


def _is_empty_raw_result(raw_result: Any) -> bool:
    if raw_result is None:
        return True
    if isinstance(raw_result, (dict, list, str, bytes)):
        return len(raw_result) == 0
    return False


def admit(id: Identifier, result: ScanResult) -> Result[None, RejectionError]:
    if result.provenance.is_empty():
        logger.warning(f"Scan result for {id} has no provenance, not storing it.")
        return Failure(
            RejectionError(
                id,
                f"Not storing scan result for '{id}' because no provenance information is available.",
            )
        )

    if _is_empty_raw_result(result.raw_result):
        logger.warning(f"Scan result for {id} has no raw result, not storing it.")
        return Failure(
            RejectionError(
                id,
                f"Not storing scan result for '{id}' because no files were scanned.",
            )
        )

    if result.summary.file_count == 0:
        logger.warning(f"Scan result for {id} has a file count of 0, not storing it.")
        return Failure(
            RejectionError(
                id,
                f"Not storing scan result for '{id}' because no files were scanned.",
            )
        )

    return Success(None)
