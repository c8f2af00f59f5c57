# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

import json
from pathlib import Path

import pytest
from scan_result_builders import (
    ID,
    PROVENANCE_WITH_SOURCE_ARTIFACT,
    PROVENANCE_WITH_VCS_INFO,
)

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.package_configuration.package_configuration import (
    PackageConfiguration,
    VcsMatcher,
)
from scan_result_cache.package_configuration.package_configuration_provider import (
    SimplePackageConfigurationProvider,
)

OTHER_ID = Identifier("type", "namespace", "other", "version")


def test_returns_first_matching_configuration() -> None:
    other_revision = PackageConfiguration(
        id=ID, vcs=VcsMatcher(type="type", url="url", revision="revision2")
    )
    matching = PackageConfiguration(
        id=ID, vcs=VcsMatcher(type="type", url="url", revision="revision")
    )
    duplicate = PackageConfiguration(
        id=ID, vcs=VcsMatcher(type="type", url="url", revision="revision")
    )
    provider = SimplePackageConfigurationProvider([other_revision, matching, duplicate])

    configuration = provider.get_package_configuration(ID, PROVENANCE_WITH_VCS_INFO)

    assert configuration is matching


def test_returns_none_without_match() -> None:
    provider = SimplePackageConfigurationProvider(
        [PackageConfiguration(id=OTHER_ID, source_artifact_url="url")]
    )

    assert provider.get_package_configuration(ID, PROVENANCE_WITH_SOURCE_ARTIFACT) is None
    assert SimplePackageConfigurationProvider().get_package_configuration(
        ID, PROVENANCE_WITH_SOURCE_ARTIFACT
    ) is None


def test_configurations_are_grouped_by_identifier_and_read_only() -> None:
    configurations = [
        PackageConfiguration(id=ID, source_artifact_url="url"),
        PackageConfiguration(id=OTHER_ID, source_artifact_url="url"),
        PackageConfiguration(id=ID, source_artifact_url="url"),
    ]
    provider = SimplePackageConfigurationProvider(configurations)

    assert len(provider.configurations_by_id[ID]) == 2
    assert len(provider.configurations_by_id[OTHER_ID]) == 1
    with pytest.raises(TypeError):
        provider.configurations_by_id[ID] = ()  # type: ignore[index]


def test_later_changes_to_input_list_are_not_visible() -> None:
    configurations = [PackageConfiguration(id=ID, source_artifact_url="url")]
    provider = SimplePackageConfigurationProvider(configurations)

    configurations.append(PackageConfiguration(id=OTHER_ID, source_artifact_url="url"))

    assert OTHER_ID not in provider.configurations_by_id


def _write_configuration(path: Path, content: dict[str, object]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(content))


def test_from_directory_loads_nested_files_and_skips_hidden(tmp_path: Path) -> None:
    _write_configuration(
        tmp_path / "type" / "name" / "source-artifact.json",
        {
            "id": "type:namespace:name:version",
            "source_artifact_url": "url",
            "path_excludes": [{"pattern": "test/*", "reason": "TEST_OF"}],
        },
    )
    _write_configuration(
        tmp_path / "type" / "name" / "vcs.json",
        {
            "id": "type:namespace:name:version",
            "vcs": {"type": "type", "url": "url", "revision": "revision"},
        },
    )
    _write_configuration(
        tmp_path / "type" / "name" / "vcs-copy.json",
        {
            "id": "type:namespace:name:version",
            "vcs": {"type": "type", "url": "url", "revision": "revision"},
        },
    )
    (tmp_path / ".hidden.json").write_text("not json at all")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "config").write_text("[core]")

    provider = SimplePackageConfigurationProvider.from_directory(str(tmp_path))

    assert len(provider.configurations_by_id[ID]) == 3
    source_artifact_configuration = provider.get_package_configuration(
        ID, PROVENANCE_WITH_SOURCE_ARTIFACT
    )
    assert source_artifact_configuration is not None
    assert source_artifact_configuration.is_path_excluded("test/unit/test_a.py")
    assert provider.get_package_configuration(ID, PROVENANCE_WITH_VCS_INFO) is not None


def test_from_directory_fails_on_invalid_record(tmp_path: Path) -> None:
    _write_configuration(
        tmp_path / "broken.json",
        {"id": "type:namespace:name:version"},
    )

    with pytest.raises(ValueError, match="not to both"):
        SimplePackageConfigurationProvider.from_directory(str(tmp_path))


def test_from_missing_directory_is_empty(tmp_path: Path) -> None:
    provider = SimplePackageConfigurationProvider.from_directory(
        str(tmp_path / "missing")
    )

    assert provider.configurations_by_id == {}
