# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""Gel schema reflection, TypeScript declaration codegen and EdgeQL
rendering."""

from __future__ import annotations

from ._version import __version__

from .errors import (
    ConfigError,
    DependencyCycleError,
    GelGenError,
    InvalidNameError,
    InvalidSetError,
    LiteralEncodingError,
    QueryBuilderError,
    SchemaError,
    UnresolvedReferenceError,
)


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
    "__version__",
)
