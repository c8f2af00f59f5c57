# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.package import Package
from scan_result_cache.model.result import Failure, Success
from scan_result_cache.model.scan_result import ScanResult, ScanResultContainer
from scan_result_cache.model.scanner_details import ScannerDetails
from scan_result_cache.storage.scan_results_storage import ScanResultsStorage

__all__ = [
    "Failure",
    "Identifier",
    "Package",
    "ScanResult",
    "ScanResultContainer",
    "ScannerDetails",
    "ScanResultsStorage",
    "Success",
]
