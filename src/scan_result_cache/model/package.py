# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

from dataclasses import dataclass

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.provenance import RemoteArtifact, VcsInfo


@dataclass(frozen=True)
class Package:
    """The package snapshot a caller wants scan results for.

    Packages from registries often know both their source artifact and the
    repository they were built from, so unlike a Provenance both may be set.
    The vcs revision may be blank if it is only resolved at scan time.
    """

    id: Identifier
    source_artifact: RemoteArtifact | None = None
    vcs: VcsInfo | None = None
