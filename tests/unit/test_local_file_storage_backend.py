# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

import json
import logging
import os
import threading
from pathlib import Path

import pytest
import pytest_mock
from scan_result_builders import ID, scan_result

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.storage.backends.local_file_storage_backend import (
    LocalFileStorageBackend,
)
from scan_result_cache.storage.errors import BackendUnavailableError


def test_each_result_is_written_to_its_own_file(tmp_path: Path) -> None:
    backend = LocalFileStorageBackend(str(tmp_path))

    backend.append(ID, scan_result())
    backend.append(ID, scan_result())

    directory = tmp_path / "type" / "namespace" / "name" / "version"
    files = sorted(os.listdir(directory))
    assert len(files) == 2
    assert all(name.endswith(".json") for name in files)
    record = json.loads((directory / files[0]).read_text())
    assert record["scanner"]["name"] == "name 1"
    assert record["raw_result"] == {"key 1": "value 1"}


def test_identifier_components_are_escaped(tmp_path: Path) -> None:
    backend = LocalFileStorageBackend(str(tmp_path))
    id = Identifier("NPM", "", "@scope/pkg", "1.0.0")

    backend.append(id, scan_result())

    assert (tmp_path / "NPM" / "_" / "%40scope%2Fpkg" / "1.0.0").is_dir()
    assert backend.load_all(id) == [scan_result()]


def test_corrupt_records_are_skipped(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.WARNING)
    backend = LocalFileStorageBackend(str(tmp_path))
    backend.append(ID, scan_result())
    directory = tmp_path / "type" / "namespace" / "name" / "version"
    (directory / "00000000_broken.json").write_text("{not json")
    (directory / "00000001_incomplete.json").write_text(json.dumps({"scanner": {}}))

    results = backend.load_all(ID)

    assert results == [scan_result()]
    assert "Could not deserialize scan result" in caplog.text
    assert "00000000_broken.json" in caplog.text
    assert "00000001_incomplete.json" in caplog.text


def test_hidden_and_foreign_files_are_ignored(tmp_path: Path) -> None:
    backend = LocalFileStorageBackend(str(tmp_path))
    backend.append(ID, scan_result())
    directory = tmp_path / "type" / "namespace" / "name" / "version"
    (directory / ".tmp-123.json").write_text("{partial")
    (directory / "README.txt").write_text("not a record")

    assert backend.load_all(ID) == [scan_result()]


def test_write_failure_raises_unavailable(
    tmp_path: Path, mocker: pytest_mock.MockFixture
) -> None:
    backend = LocalFileStorageBackend(str(tmp_path))
    mocker.patch(
        "scan_result_cache.storage.backends.local_file_storage_backend.write_file_atomically",
        side_effect=OSError("No space left on device"),
    )

    with pytest.raises(BackendUnavailableError, match="No space left on device"):
        backend.append(ID, scan_result())


def test_unreadable_record_raises_unavailable(
    tmp_path: Path, mocker: pytest_mock.MockFixture
) -> None:
    backend = LocalFileStorageBackend(str(tmp_path))
    backend.append(ID, scan_result())
    mocker.patch(
        "scan_result_cache.storage.backends.local_file_storage_backend.open_file",
        side_effect=PermissionError("Permission denied"),
    )

    with pytest.raises(BackendUnavailableError, match="Permission denied"):
        backend.load_all(ID)


def test_concurrent_appends_keep_every_result(tmp_path: Path) -> None:
    backend = LocalFileStorageBackend(str(tmp_path))
    results = [
        scan_result(raw_result={"run": index}) for index in range(20)
    ]
    threads = [
        threading.Thread(target=backend.append, args=(ID, result)) for result in results
    ]

    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    stored = backend.load_all(ID)
    assert len(stored) == 20
    assert sorted(result.raw_result["run"] for result in stored) == list(range(20))


def test_results_survive_a_new_backend_instance(tmp_path: Path) -> None:
    LocalFileStorageBackend(str(tmp_path)).append(ID, scan_result())

    assert LocalFileStorageBackend(str(tmp_path)).load_all(ID) == [scan_result()]
