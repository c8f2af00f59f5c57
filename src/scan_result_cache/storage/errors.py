# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

from scan_result_cache.model.identifier import Identifier


class StorageError(Exception):
    """Base class of all errors reported by the scan results storage."""

    pass


class RejectionError(StorageError):
    """Exception raised when a scan result is not admitted to the storage.

    Rejections are deterministic, resubmitting the same result fails again.
    """

    def __init__(self, id: Identifier, reason: str) -> None:
        super().__init__(reason)
        self.id = id
        self.reason = reason


class BackendError(StorageError):
    """Exception raised when a storage backend cannot serve a request."""

    pass


class BackendUnavailableError(BackendError):
    """Exception raised when a storage backend cannot be reached or timed out.

    The condition is transient, the request may be retried later.
    """

    pass


class CorruptRecordError(BackendError):
    """Exception raised when a stored record cannot be deserialized."""

    def __init__(self, location: str, cause: Exception) -> None:
        super().__init__(f"Could not deserialize scan result at {location}: {cause}")
        self.location = location
        self.cause = cause
