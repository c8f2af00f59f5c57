# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

from scan_result_cache.config.cli_configs import Config, StorageBackendType
from scan_result_cache.storage.backends.abstract_storage_backend import (
    StorageBackend,
)
from scan_result_cache.storage.backends.http_storage_backend import (
    HttpStorageBackend,
)
from scan_result_cache.storage.backends.in_memory_storage_backend import (
    InMemoryStorageBackend,
)
from scan_result_cache.storage.backends.local_file_storage_backend import (
    LocalFileStorageBackend,
)


def create_storage_backend(config: Config) -> StorageBackend:
    if config.storage_backend == StorageBackendType.LOCAL:
        return LocalFileStorageBackend(config.local_storage_directory)
    if config.storage_backend == StorageBackendType.HTTP:
        if not config.http_storage_url:
            raise ValueError("The http storage backend requires http_storage_url.")
        return HttpStorageBackend(
            config.http_storage_url,
            timeout=config.http_timeout_seconds,
            max_retries=config.http_max_retries,
            headers=config.http_headers,
        )
    return InMemoryStorageBackend()
