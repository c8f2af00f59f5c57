# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

from dataclasses import dataclass


@dataclass(frozen=True)
class Identifier:
    """Identifier of a package: the key under which scan results are grouped."""

    type: str  # package manager or ecosystem, e.g. Maven, NPM, PyPI
    namespace: str  # group id, scope or empty
    name: str
    version: str

    @staticmethod
    def from_coordinates(coordinates: str) -> "Identifier":
        """Parse an identifier from its 'type:namespace:name:version' form.

        Empty components are allowed, but all four must be present.

        Raises:
            ValueError: If the string does not have exactly four components
        """
        parts = coordinates.split(":")
        if len(parts) != 4:
            raise ValueError(
                f"Invalid identifier: '{coordinates}'. Expected format: 'type:namespace:name:version'"
            )
        return Identifier(
            type=parts[0], namespace=parts[1], name=parts[2], version=parts[3]
        )

    def to_coordinates(self) -> str:
        return f"{self.type}:{self.namespace}:{self.name}:{self.version}"

    def __str__(self) -> str:
        return self.to_coordinates()
