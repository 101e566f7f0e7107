# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

from ._emitter import (
    COMMENT,
    SchemaEmitter,
    generate_tree,
)

from ._generator import (
    AbstractCodeGenerator,
    GeneratorOptions,
    InterfacesGenerator,
)

from ._module import (
    GeneratedModule,
    GeneratedTree,
)

from ._projection import (
    EmissionContext,
    TypeProjector,
    ident,
)


__all__ = (
    "COMMENT",
    "AbstractCodeGenerator",
    "EmissionContext",
    "GeneratedModule",
    "GeneratedTree",
    "GeneratorOptions",
    "InterfacesGenerator",
    "SchemaEmitter",
    "TypeProjector",
    "generate_tree",
    "ident",
)
