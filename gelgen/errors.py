# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""Exceptions raised by gelgen."""

from __future__ import annotations

from collections.abc import Iterable


__all__ = (
    "ConfigError",
    "DependencyCycleError",
    "GelGenError",
    "InvalidNameError",
    "InvalidSetError",
    "LiteralEncodingError",
    "QueryBuilderError",
    "SchemaError",
    "UnresolvedReferenceError",
)


class GelGenError(Exception):
    pass


class SchemaError(GelGenError):
    """The introspected schema is internally inconsistent."""


class UnresolvedReferenceError(SchemaError):
    def __init__(self, type_id: str, context: str) -> None:
        super().__init__(f"reference to an unknown type {type_id} {context}")
        self.type_id = type_id
        self.context = context


class InvalidNameError(SchemaError):
    def __init__(self, name: str, reason: str = "") -> None:
        msg = f"invalid schema name {name!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.name = name


class DependencyCycleError(SchemaError):
    def __init__(self, type_name: str, others: Iterable[str]) -> None:
        self.type_name = type_name
        self.others = tuple(others)
        super().__init__(
            f"dependency cycle between {type_name} and "
            f"{', '.join(self.others)}"
        )

    @property
    def names(self) -> tuple[str, ...]:
        return (self.type_name, *self.others)


class QueryBuilderError(GelGenError):
    pass


class LiteralEncodingError(QueryBuilderError, TypeError):
    pass


class InvalidSetError(QueryBuilderError, TypeError):
    def __init__(self, element_names: Iterable[str]) -> None:
        self.element_names = tuple(element_names)
        super().__init__(
            f"Invalid arguments to set constructor: "
            f"{', '.join(self.element_names)}"
        )


class ConfigError(GelGenError, ValueError):
    pass
