# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""Emission of per-module TypeScript declarations and the types spec"""

from __future__ import annotations
from typing import TYPE_CHECKING

import json
import logging

from gelgen import errors
from gelgen._internal import _reflection as reflection

from ._module import GeneratedModule, GeneratedTree
from ._projection import (
    RUNTIME_REFLECTION_ALIAS,
    EmissionContext,
    TypeProjector,
    ident,
    unique_idents,
)

if TYPE_CHECKING:
    from collections.abc import Iterable


logger = logging.getLogger(__name__)


COMMENT = """\
//
// Automatically generated from Gel schema.
//
// Do not edit directly as re-generating this file will overwrite any changes.
//\
"""

SPEC_PATH = "__spec__.ts"
INDEX_PATH = "index.ts"

# Link sub-pointers every link has; not reflected as link properties.
_IMPLICIT_LINK_POINTERS = frozenset({"source", "target"})


def modules_path(mod: str) -> str:
    return f"modules/{mod}.ts"


def types_path(mod: str) -> str:
    return f"__types__/{mod}.ts"


def _js(value: object) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _field_name(name: str) -> str:
    return name if name.isidentifier() else _js(name)


def _cardinality(rt: str, ptr: reflection.Pointer) -> str:
    return f"{rt}.Cardinality.{ptr.derived_cardinality}"


class SchemaEmitter:
    def __init__(
        self,
        types: Iterable[reflection.AnyType],
        *,
        runtime_module: str = "edgedb",
        preamble: str = COMMENT,
    ) -> None:
        self._graph = reflection.SchemaGraph(types)
        self._runtime_module = runtime_module
        self._preamble = preamble
        self._projector = TypeProjector(self._graph)

    @property
    def graph(self) -> reflection.SchemaGraph:
        return self._graph

    def emit(self) -> GeneratedTree:
        """Generate the full declaration tree.

        Validation and ordering happen before anything is emitted, so a
        schema inconsistency never yields a partial tree.
        """
        self._graph.validate()
        ordered = self._graph.sorted_types()

        tree = GeneratedTree(self._preamble)
        modules: set[str] = set()
        for t in ordered:
            if reflection.is_scalar_type(t) or (
                reflection.is_object_type(t) and not t.is_compound
            ):
                modules.add(t.qualname.module)

        for t in ordered:
            if reflection.is_scalar_type(t) and t.is_enum:
                self.write_enum(tree, t)

        for t in ordered:
            if reflection.is_object_type(t) and not t.is_compound:
                self.write_interface(tree, t)

        self.write_spec(tree, ordered)

        for t in ordered:
            if reflection.is_object_type(t) and not t.is_compound:
                self.write_type_handle(tree, t)

        self.write_index(tree, modules)

        logger.debug(
            "emitted %d files for %d modules", len(tree), len(modules)
        )
        return tree

    def _context(self, mod: str, code: GeneratedModule) -> EmissionContext:
        return EmissionContext(
            module=mod,
            code=code,
            runtime_module=self._runtime_module,
        )

    def _import_reflection(self, code: GeneratedModule) -> str:
        return code.import_name(
            self._runtime_module,
            "reflection",
            alias=RUNTIME_REFLECTION_ALIAS,
        )

    def write_enum(
        self,
        tree: GeneratedTree,
        stype: reflection.ScalarType,
    ) -> None:
        mod, name = stype.qualname
        code = tree.get_path(modules_path(mod))
        code.write(f"export enum {ident(name)} {{")
        with code.indented():
            for case, value in unique_idents(stype.enum_values):
                code.write(f"{case} = {_js(value)},")
        code.write("}")
        code.write_section_break()

    def write_interface(
        self,
        tree: GeneratedTree,
        objtype: reflection.ObjectType,
    ) -> None:
        mod, name = objtype.qualname
        code = tree.get_path(types_path(mod))
        ctx = self._context(mod, code)
        rt = self._import_reflection(code)

        bases = []
        for ref in objtype.bases:
            base = self._graph.get(ref.id, f"in bases of {objtype.name}")
            if not reflection.is_object_type(base):
                raise errors.SchemaError(
                    f"base {base.name} of {objtype.name} is not an object type"
                )
            bases.append(self._projector.object_ref(base, ctx))

        if bases:
            code.write(
                f"export interface {ident(name)} "
                f"extends {', '.join(bases)} {{"
            )
        else:
            code.write(f"export interface {ident(name)} {{")

        with code.indented():
            for ptr in objtype.pointers:
                target = self._projector.pointer_target(objtype, ptr, ctx)
                card = _cardinality(rt, ptr)
                if reflection.is_link(ptr):
                    desc = "LinkDesc"
                else:
                    desc = "PropertyDesc"
                code.write(
                    f"{_field_name(ptr.name)}: {rt}.{desc}<{target}, {card}>;"
                )
        code.write("}")
        code.write_section_break()

    def write_spec(
        self,
        tree: GeneratedTree,
        ordered: Iterable[reflection.AnyType],
    ) -> None:
        code = tree.get_path(SPEC_PATH)
        rt = self._import_reflection(code)
        code.write(
            f"export const spec: {rt}.TypesSpec = new {rt}.StrictMap();"
        )
        code.write_section_break()

        for t in ordered:
            if reflection.is_object_type(t):
                self._write_spec_entry(code, rt, t)

    def _type_names(
        self,
        refs: Iterable[reflection.TypeRef],
        context: str,
    ) -> list[str]:
        return [self._graph.get(ref.id, context).name for ref in refs]

    def _write_spec_entry(
        self,
        code: GeneratedModule,
        rt: str,
        objtype: reflection.ObjectType,
    ) -> None:
        bases = self._type_names(objtype.bases, f"in bases of {objtype.name}")
        ancestors = self._type_names(
            objtype.ancestors, f"in ancestors of {objtype.name}"
        )

        code.write(f"spec.set({_js(objtype.name)}, {{")
        with code.indented():
            code.write(f"name: {_js(objtype.name)},")
            code.write(f"bases: {_js(bases)},")
            code.write(f"ancestors: {_js(ancestors)},")

            code.write("properties: [")
            with code.indented():
                for ptr in objtype.pointers:
                    if reflection.is_property(ptr):
                        self._write_spec_property(code, rt, ptr)
            code.write("],")

            code.write("links: [")
            with code.indented():
                for ptr in objtype.pointers:
                    if reflection.is_link(ptr):
                        self._write_spec_link(code, rt, objtype, ptr)
            code.write("],")
        code.write("});")
        code.write_section_break()

    def _write_spec_property(
        self,
        code: GeneratedModule,
        rt: str,
        ptr: reflection.Pointer,
    ) -> None:
        code.write("{")
        with code.indented():
            code.write(f"name: {_js(ptr.name)},")
            code.write(f"cardinality: {_cardinality(rt, ptr)},")
        code.write("},")

    def _write_spec_link(
        self,
        code: GeneratedModule,
        rt: str,
        objtype: reflection.ObjectType,
        ptr: reflection.Pointer,
    ) -> None:
        target = self._graph.get(
            ptr.target_id, f"in pointer {objtype.name}.{ptr.name}"
        )
        code.write("{")
        with code.indented():
            code.write(f"name: {_js(ptr.name)},")
            code.write(f"cardinality: {_cardinality(rt, ptr)},")
            code.write(f"target: {_js(target.name)},")
            code.write("properties: [")
            with code.indented():
                for lprop in _link_properties(ptr):
                    self._write_spec_property(code, rt, lprop)
            code.write("],")
        code.write("},")

    def write_type_handle(
        self,
        tree: GeneratedTree,
        objtype: reflection.ObjectType,
    ) -> None:
        mod, name = objtype.qualname
        code = tree.get_path(modules_path(mod))
        rt = self._import_reflection(code)
        spec = code.import_name("../__spec__", "spec", alias="__spec__")
        types_ns = code.import_namespace(
            f"../__types__/{mod}",
            "__types__",
            type_only=True,
        )
        handle = ident(name)
        code.write(
            f"export const {handle} = {rt}.objectType<{types_ns}.{handle}>("
        )
        with code.indented():
            code.write(f"{spec},")
            code.write(f"{_js(objtype.name)},")
        code.write(");")
        code.write_section_break()

    def write_index(self, tree: GeneratedTree, modules: Iterable[str]) -> None:
        index = tree.get_path(INDEX_PATH)
        for mod in sorted(modules):
            path = modules_path(mod)
            if path not in tree or tree.files[path].is_empty():
                continue
            index.export_namespace(f"./modules/{mod}", ident(mod))


def _link_properties(
    ptr: reflection.Pointer,
) -> list[reflection.Pointer]:
    # Every link owns "source" and "target"; anything beyond those two is
    # a user-defined link property.
    if not ptr.pointers or len(ptr.pointers) <= 2:
        return []
    return [
        p
        for p in ptr.pointers
        if reflection.is_property(p) and p.name not in _IMPLICIT_LINK_POINTERS
    ]


def generate_tree(
    types: Iterable[reflection.AnyType],
    *,
    runtime_module: str = "edgedb",
    preamble: str = COMMENT,
) -> GeneratedTree:
    return SchemaEmitter(
        types,
        runtime_module=runtime_module,
        preamble=preamble,
    ).emit()
