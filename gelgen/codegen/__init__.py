# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""TypeScript declaration generator for Gel schemas."""

from gelgen._internal._codegen import (
    COMMENT,
    EmissionContext,
    GeneratedModule,
    GeneratedTree,
    GeneratorOptions,
    InterfacesGenerator,
    SchemaEmitter,
    TypeProjector,
    generate_tree,
)


__all__ = (
    "COMMENT",
    "EmissionContext",
    "GeneratedModule",
    "GeneratedTree",
    "GeneratorOptions",
    "InterfacesGenerator",
    "SchemaEmitter",
    "TypeProjector",
    "generate_tree",
)
