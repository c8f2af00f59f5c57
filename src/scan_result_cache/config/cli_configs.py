# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

from dataclasses import dataclass, field
from enum import Enum


class StorageBackendType(Enum):
    MEMORY = "memory"
    LOCAL = "local"
    HTTP = "http"


@dataclass
class Config:
    storage_backend: StorageBackendType
    local_storage_directory: str
    http_storage_url: str | None
    http_timeout_seconds: float
    http_max_retries: int
    http_headers: dict[str, str] = field(default_factory=dict)


default_config = Config(
    storage_backend=StorageBackendType.MEMORY,
    local_storage_directory="~/.cache/scan-result-cache",
    http_storage_url=None,
    http_timeout_seconds=10.0,
    http_max_retries=5,
    http_headers={},
)
