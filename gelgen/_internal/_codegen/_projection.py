# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""Projection of introspected types onto TypeScript type expressions"""

from __future__ import annotations
from typing import TYPE_CHECKING

import dataclasses
import functools
import re

from typing_extensions import assert_never

from gelgen import errors
from gelgen._internal import _reflection as reflection

from ._module import GeneratedModule

if TYPE_CHECKING:
    from collections.abc import Iterable


UNKNOWN = "unknown"

# Aliases for the runtime package.  The "$" binding carries the
# reflection namespace; the namespace import is used for datatypes.
RUNTIME_REFLECTION_ALIAS = "$"
RUNTIME_NAMESPACE_ALIAS = "edgedb"

_PRIMITIVES: dict[str, str] = {
    "std::int16": "number",
    "std::int32": "number",
    "std::int64": "number",
    "std::float32": "number",
    "std::float64": "number",
    "std::str": "string",
    "std::uuid": "string",
    "std::json": "string",
    "std::bool": "boolean",
    "std::bigint": "BigInt",
    "std::datetime": "Date",
    # std::decimal and std::bytes have no faithful JS counterpart and
    # fall through to UNKNOWN along with everything else.
}

_RUNTIME_DATATYPES: dict[str, str] = {
    "std::duration": "Duration",
    "cal::local_datetime": "LocalDateTime",
    "cal::local_date": "LocalDate",
    "cal::local_time": "LocalTime",
}


_non_ident_re = re.compile(r"[^a-zA-Z0-9_]+")


@functools.cache
def ident(s: str) -> str:
    """Turn an unqualified schema name or enum literal into an identifier."""
    if "::" in s:
        raise errors.InvalidNameError(s, "expected an unqualified name")
    result = _non_ident_re.sub("_", s)
    if not result or result[0].isdigit():
        result = f"_{result}"
    return result


def unique_idents(values: Iterable[str]) -> list[tuple[str, str]]:
    """Return ``(identifier, value)`` pairs with collisions resolved."""
    seen: set[str] = set()
    result = []
    for value in values:
        base = ident(value)
        name = base
        ctr = 1
        while name in seen:
            ctr += 1
            name = f"{base}_{ctr}"
        seen.add(name)
        result.append((name, value))
    return result


@dataclasses.dataclass(kw_only=True)
class EmissionContext:
    """Where a projected expression is going to be written."""

    module: str
    code: GeneratedModule
    runtime_module: str = "edgedb"


class TypeProjector:
    def __init__(self, graph: reflection.SchemaGraph) -> None:
        self._graph = graph

    def get_type(
        self,
        t: reflection.AnyType,
        ctx: EmissionContext,
    ) -> str:
        if isinstance(t, reflection.ObjectType):
            return self.object_type(t, ctx)
        else:
            return self.primitive_type(t, ctx)

    def pointer_target(
        self,
        owner: reflection.ObjectType,
        ptr: reflection.Pointer,
        ctx: EmissionContext,
    ) -> str:
        target = self._graph.get(
            ptr.target_id, f"in pointer {owner.name}.{ptr.name}"
        )
        if reflection.is_link(ptr):
            if not isinstance(target, reflection.ObjectType):
                raise errors.SchemaError(
                    f"link {owner.name}.{ptr.name} targets "
                    f"non-object type {target.name}"
                )
            return self.object_type(target, ctx)
        else:
            if isinstance(target, reflection.ObjectType):
                raise errors.SchemaError(
                    f"property {owner.name}.{ptr.name} targets "
                    f"object type {target.name}"
                )
            return self.primitive_type(target, ctx)

    def primitive_type(
        self,
        t: reflection.PrimitiveType,
        ctx: EmissionContext,
    ) -> str:
        if isinstance(t, reflection.ScalarType):
            return self._scalar_type(t, ctx)
        elif isinstance(t, reflection.ArrayType):
            el = self._primitive_by_id(
                t.array_element_id, f"as the element type of {t.name}", ctx
            )
            return f"{el}[]"
        elif isinstance(t, reflection.TupleType):
            return self._tuple_type(t, ctx)
        else:
            assert_never(t)

    def _primitive_by_id(
        self,
        type_id: str,
        context: str,
        ctx: EmissionContext,
    ) -> str:
        t = self._graph.get(type_id, context)
        if isinstance(t, reflection.ObjectType):
            raise errors.SchemaError(
                f"object type {t.name} used {context}, "
                f"where only primitive types are allowed"
            )
        return self.primitive_type(t, ctx)

    def _scalar_type(
        self,
        t: reflection.ScalarType,
        ctx: EmissionContext,
    ) -> str:
        if t.is_enum:
            mod, name = t.qualname
            alias = ctx.code.import_namespace(
                f"../modules/{mod}",
                f"{ident(mod)}Enums",
                type_only=True,
            )
            return f"{alias}.{ident(name)}"

        if t.material_id is not None:
            material = self._graph.get(
                t.material_id, f"as the material type of {t.name}"
            )
            if not isinstance(material, reflection.ScalarType):
                raise errors.SchemaError(
                    f"material type of {t.name} is not a scalar type"
                )
            if material.material_id is not None or material.is_enum:
                raise errors.SchemaError(
                    f"material type {material.name} of {t.name} "
                    f"is not a built-in scalar"
                )
            return self._scalar_type(material, ctx)

        return self._builtin_scalar(t, ctx)

    def _builtin_scalar(
        self,
        t: reflection.ScalarType,
        ctx: EmissionContext,
    ) -> str:
        primitive = _PRIMITIVES.get(t.name)
        if primitive is not None:
            return primitive

        datatype = _RUNTIME_DATATYPES.get(t.name)
        if datatype is not None:
            alias = ctx.code.import_namespace(
                ctx.runtime_module,
                RUNTIME_NAMESPACE_ALIAS,
            )
            return f"{alias}.{datatype}"

        return UNKNOWN

    def _tuple_type(
        self,
        t: reflection.TupleType,
        ctx: EmissionContext,
    ) -> str:
        if not t.tuple_elements:
            return "[]"

        elements = [
            (
                el.name,
                self._primitive_by_id(
                    el.target_id, f"as element {el.name!r} of {t.name}", ctx
                ),
            )
            for el in t.tuple_elements
        ]
        if t.is_named:
            return "{" + ", ".join(f"{n}: {tn}" for n, tn in elements) + "}"
        else:
            return "[" + ", ".join(tn for _, tn in elements) + "]"

    def object_type(
        self,
        t: reflection.ObjectType,
        ctx: EmissionContext,
        *,
        level: int = 0,
    ) -> str:
        if t.intersection_of:
            return self._compound(t, t.intersection_of, " & ", ctx, level)
        elif t.union_of:
            return self._compound(t, t.union_of, " | ", ctx, level)
        else:
            return self.object_ref(t, ctx)

    def _compound(
        self,
        t: reflection.ObjectType,
        members: Iterable[reflection.TypeRef],
        op: str,
        ctx: EmissionContext,
        level: int,
    ) -> str:
        res = []
        for ref in members:
            sub = self._graph.get(ref.id, f"as a member of {t.name}")
            if not isinstance(sub, reflection.ObjectType):
                raise errors.SchemaError(
                    f"{sub.name} is a member of {t.name}, "
                    f"but is not an object type"
                )
            res.append(self.object_type(sub, ctx, level=level + 1))
        ret = op.join(res)
        return f"({ret})" if level > 0 else ret

    def object_ref(
        self,
        t: reflection.ObjectType,
        ctx: EmissionContext,
    ) -> str:
        """Reference the interface of *t* from the module being emitted."""
        mod, name = t.qualname
        if mod != ctx.module:
            alias = ctx.code.import_namespace(
                f"./{mod}",
                f"{ident(mod)}Types",
                type_only=True,
            )
            return f"{alias}.{ident(name)}"
        else:
            return ident(name)
