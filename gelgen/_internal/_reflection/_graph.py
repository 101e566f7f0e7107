# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""Dependency ordering of introspected types"""

from __future__ import annotations
from typing import TYPE_CHECKING

import logging

from typing_extensions import assert_never

from gelgen import errors

from ._types import (
    AnyType,
    ArrayType,
    ObjectType,
    Pointer,
    ScalarType,
    TupleType,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping


logger = logging.getLogger(__name__)


class SchemaGraph:
    """An id-indexed arena of introspected types.

    Edges go from an object or scalar type to each of its direct bases.
    Arrays and tuples are nodes without edges.
    """

    def __init__(self, types: Iterable[AnyType]) -> None:
        self._types: dict[str, AnyType] = {}
        for t in types:
            self._types[t.id] = t
        self._adj: dict[str, tuple[str, ...]] = {}
        for t in self._types.values():
            if isinstance(t, (ObjectType, ScalarType)):
                for base in t.bases:
                    if base.id not in self._types:
                        raise errors.UnresolvedReferenceError(
                            base.id, f"in bases of {t.name}"
                        )
                self._adj[t.id] = tuple(
                    dict.fromkeys(base.id for base in t.bases)
                )
        self._by_name: dict[str, AnyType] | None = None

    @property
    def types(self) -> Mapping[str, AnyType]:
        return self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[AnyType]:
        return iter(self._types.values())

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types

    def get(self, type_id: str, context: str = "") -> AnyType:
        try:
            return self._types[type_id]
        except KeyError:
            raise errors.UnresolvedReferenceError(type_id, context) from None

    def get_by_name(self, name: str) -> AnyType:
        if self._by_name is None:
            self._by_name = {t.name: t for t in self._types.values()}
        return self._by_name[name]

    def bases_of(self, type_id: str) -> tuple[str, ...]:
        return self._adj.get(type_id, ())

    def validate(self) -> None:
        """Check that every type reference resolves within the snapshot."""
        for t in self._types.values():
            for ref_id, context in _references(t):
                if ref_id not in self._types:
                    raise errors.UnresolvedReferenceError(ref_id, context)

    def sorted_types(self) -> list[AnyType]:
        """Return all types so that every type follows its direct bases.

        The traversal is a depth-first search driven by an explicit
        stack; its outer loop follows snapshot order, so the result is
        stable for a given snapshot.
        """
        visiting: dict[str, None] = {}
        visited: set[str] = set()
        result: list[AnyType] = []

        for root in self._types.values():
            if root.id in visited:
                continue
            self._enter(root, visiting)
            stack = [(root, iter(self.bases_of(root.id)))]
            while stack:
                t, bases = stack[-1]
                for base_id in bases:
                    if base_id not in visited:
                        base = self._types[base_id]
                        self._enter(base, visiting)
                        stack.append((base, iter(self.bases_of(base_id))))
                        break
                else:
                    stack.pop()
                    result.append(t)
                    visited.add(t.id)
                    del visiting[t.name]

        logger.debug("sorted %d types", len(result))
        return result

    def _enter(self, t: AnyType, visiting: dict[str, None]) -> None:
        if t.name in visiting:
            raise errors.DependencyCycleError(
                t.name, _cycle_partners(t.name, visiting)
            )
        visiting[t.name] = None


def _cycle_partners(name: str, visiting: Mapping[str, None]) -> list[str]:
    # Entries above the re-entered type on the stack form the cycle.
    names = list(visiting)
    members = names[names.index(name) + 1 :]
    return members or [name]


def _pointer_references(
    owner: str,
    pointers: Iterable[Pointer],
) -> Iterator[tuple[str, str]]:
    for ptr in pointers:
        yield ptr.target_id, f"in pointer {owner}.{ptr.name}"
        if ptr.pointers:
            yield from _pointer_references(f"{owner}.{ptr.name}", ptr.pointers)


def _references(t: AnyType) -> Iterator[tuple[str, str]]:
    if isinstance(t, ScalarType):
        for ref in t.bases:
            yield ref.id, f"in bases of {t.name}"
        for ref in t.ancestors:
            yield ref.id, f"in ancestors of {t.name}"
        if t.material_id is not None:
            yield t.material_id, f"as the material type of {t.name}"
    elif isinstance(t, ObjectType):
        for ref in t.bases:
            yield ref.id, f"in bases of {t.name}"
        for ref in t.ancestors:
            yield ref.id, f"in ancestors of {t.name}"
        for ref in t.union_of:
            yield ref.id, f"in union_of of {t.name}"
        for ref in t.intersection_of:
            yield ref.id, f"in intersection_of of {t.name}"
        yield from _pointer_references(t.name, t.pointers)
    elif isinstance(t, ArrayType):
        yield t.array_element_id, f"as the element type of {t.name}"
    elif isinstance(t, TupleType):
        for el in t.tuple_elements:
            yield el.target_id, f"as element {el.name!r} of {t.name}"
    else:
        assert_never(t)


def topo_sort(types: Iterable[AnyType]) -> list[AnyType]:
    """Validate a snapshot and return it in dependency order."""
    graph = SchemaGraph(types)
    graph.validate()
    return graph.sorted_types()
