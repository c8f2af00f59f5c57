# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

from abc import ABC, abstractmethod

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.scan_result import ScanResult


class StorageBackend(ABC):
    """Persistence port of the scan results storage.

    The store is append-only: append must never drop a result that another
    writer appended concurrently for the same identifier, and load_all must
    return a consistent snapshot that includes the caller's own appends.

    Both methods raise BackendUnavailableError when the backend cannot be
    reached in time. Records that cannot be deserialized are logged and left
    out of load_all instead of failing the whole read.
    """

    @abstractmethod
    def append(self, id: Identifier, result: ScanResult) -> None:
        raise NotImplementedError

    @abstractmethod
    def load_all(self, id: Identifier) -> list[ScanResult]:
        raise NotImplementedError
