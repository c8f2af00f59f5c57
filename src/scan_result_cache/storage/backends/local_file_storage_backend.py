# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

import json
import logging
import uuid
from urllib.parse import quote

from scan_result_cache.adaptors.datetime import get_datetime_now
from scan_result_cache.adaptors.os import (
    create_dirs,
    expand_user_path,
    is_directory,
    list_dir,
    open_file,
    path_exists,
    path_join,
    write_file_atomically,
)
from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.scan_result import ScanResult
from scan_result_cache.model.serialization import (
    scan_result_from_dict,
    scan_result_to_dict,
)
from scan_result_cache.storage.backends.abstract_storage_backend import (
    StorageBackend,
)
from scan_result_cache.storage.errors import (
    BackendUnavailableError,
    CorruptRecordError,
)

# Get application-specific logger
logger = logging.getLogger("scan_result_cache")

RECORD_SUFFIX = ".json"


def _path_component(value: str) -> str:
    # empty namespaces are common, keep a visible placeholder
    return quote(value, safe="") if value else "_"


class LocalFileStorageBackend(StorageBackend):
    """Stores scan results as JSON files in a local directory tree.

    Each identifier gets its own directory <root>/<type>/<namespace>/<name>/<version>
    and each result is written to its own file. New files are moved in place
    atomically under a unique name, so concurrent writers, even from separate
    processes, never overwrite each other.
    """

    def __init__(self, root_directory: str) -> None:
        self.root_directory = expand_user_path(root_directory)
        try:
            create_dirs(self.root_directory)
        except OSError as e:
            raise BackendUnavailableError(
                f"Cannot create storage directory {self.root_directory}: {e}"
            ) from e
        logger.info(f"Using local scan results storage at {self.root_directory}.")

    def _directory_for(self, id: Identifier) -> str:
        return path_join(
            self.root_directory,
            _path_component(id.type),
            _path_component(id.namespace),
            _path_component(id.name),
            _path_component(id.version),
        )

    def append(self, id: Identifier, result: ScanResult) -> None:
        directory = self._directory_for(id)
        # timestamp first so that listing the directory yields insertion order
        file_name = (
            f"{get_datetime_now().strftime('%Y%m%d_%H%M%S_%fZ')}_{uuid.uuid4().hex}"
            f"{RECORD_SUFFIX}"
        )
        try:
            create_dirs(directory)
            write_file_atomically(
                path_join(directory, file_name),
                json.dumps(scan_result_to_dict(result), indent=2),
            )
        except OSError as e:
            raise BackendUnavailableError(
                f"Cannot write scan result for {id} to {directory}: {e}"
            ) from e
        logger.debug(f"Stored scan result for {id} at {directory}/{file_name}.")

    def load_all(self, id: Identifier) -> list[ScanResult]:
        directory = self._directory_for(id)
        if not path_exists(directory):
            return []
        if not is_directory(directory):
            raise BackendUnavailableError(
                f"Storage location {directory} for {id} is not a directory."
            )

        try:
            file_names = sorted(
                name
                for name in list_dir(directory)
                if name.endswith(RECORD_SUFFIX) and not name.startswith(".")
            )
        except OSError as e:
            raise BackendUnavailableError(
                f"Cannot list scan results for {id} in {directory}: {e}"
            ) from e

        results = []
        for file_name in file_names:
            file_path = path_join(directory, file_name)
            try:
                content = open_file(file_path)
            except FileNotFoundError:
                # removed by someone else since listing
                continue
            except OSError as e:
                raise BackendUnavailableError(
                    f"Cannot read scan result {file_path}: {e}"
                ) from e
            try:
                results.append(scan_result_from_dict(json.loads(content)))
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                logger.warning(str(CorruptRecordError(file_path, e)))
        return results
