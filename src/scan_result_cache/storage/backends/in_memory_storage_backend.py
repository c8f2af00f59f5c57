# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

import logging
import threading

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.scan_result import ScanResult
from scan_result_cache.storage.backends.abstract_storage_backend import (
    StorageBackend,
)

# Get application-specific logger
logger = logging.getLogger("scan_result_cache")


class InMemoryStorageBackend(StorageBackend):
    """Keeps scan results in process memory. Results are lost on exit."""

    def __init__(self) -> None:
        self._results: dict[Identifier, list[ScanResult]] = {}
        self._lock = threading.Lock()

    def append(self, id: Identifier, result: ScanResult) -> None:
        with self._lock:
            self._results.setdefault(id, []).append(result)
            count = len(self._results[id])
        logger.debug(f"Stored scan result #{count} for {id} in memory.")

    def load_all(self, id: Identifier) -> list[ScanResult]:
        with self._lock:
            return list(self._results.get(id, []))
