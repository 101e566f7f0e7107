# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

from __future__ import annotations

import unittest

from gelgen import errors
from gelgen._internal import _reflection as reflection

from tests import schema_fixtures as fx


def _obj(id: str, name: str, *bases: str) -> reflection.ObjectType:
    return reflection.ObjectType(
        id=id,
        name=name,
        bases=tuple(reflection.TypeRef(id=b) for b in bases),
    )


class TestSchemaGraph(unittest.TestCase):
    def test_sorted_types_bases_first(self) -> None:
        """Every type is ordered after all of its direct bases"""
        types = reflection.parse_types(fx.schema_rows())
        ordered = reflection.topo_sort(types)

        self.assertEqual(len(ordered), len(types))
        position = {t.id: i for i, t in enumerate(ordered)}
        for t in ordered:
            if reflection.is_inheriting_type(t):
                for base in t.bases:
                    self.assertLess(position[base.id], position[t.id])

    def test_sorted_types_is_deterministic(self) -> None:
        types = reflection.parse_types(fx.schema_rows())
        first = [t.name for t in reflection.topo_sort(types)]
        second = [t.name for t in reflection.topo_sort(types)]
        self.assertEqual(first, second)
        self.assertEqual(
            first[:6],
            [
                "std::BaseObject",
                "std::Object",
                "default::Person",
                "default::Movie",
                "default::Person | default::Movie",
                "other::Thing",
            ],
        )

    def test_sorted_types_diamond(self) -> None:
        """A shared base is emitted once"""
        types = [
            _obj("d", "default::D", "b", "c"),
            _obj("b", "default::B", "a"),
            _obj("c", "default::C", "a"),
            _obj("a", "default::A"),
        ]
        ordered = [t.name for t in reflection.topo_sort(types)]
        self.assertEqual(
            ordered,
            ["default::A", "default::B", "default::C", "default::D"],
        )

    def test_duplicate_bases(self) -> None:
        types = [_obj("b", "default::B", "a", "a"), _obj("a", "default::A")]
        graph = reflection.SchemaGraph(types)
        self.assertEqual(graph.bases_of("b"), ("a",))
        self.assertEqual(
            [t.name for t in graph.sorted_types()],
            ["default::A", "default::B"],
        )

    def test_cycle(self) -> None:
        types = [_obj("a", "default::A", "b"), _obj("b", "default::B", "a")]
        with self.assertRaises(errors.DependencyCycleError) as cm:
            reflection.topo_sort(types)
        self.assertEqual(
            str(cm.exception),
            "dependency cycle between default::A and default::B",
        )
        self.assertEqual(cm.exception.names, ("default::A", "default::B"))

    def test_cycle_behind_prefix(self) -> None:
        """Only the types forming the cycle are reported"""
        types = [
            _obj("d", "default::D", "c"),
            _obj("c", "default::C", "a"),
            _obj("a", "default::A", "b"),
            _obj("b", "default::B", "a"),
        ]
        with self.assertRaises(errors.DependencyCycleError) as cm:
            reflection.topo_sort(types)
        message = str(cm.exception)
        self.assertIn("default::A", message)
        self.assertIn("default::B", message)
        self.assertNotIn("default::C", message)
        self.assertNotIn("default::D", message)
        self.assertEqual(cm.exception.names, ("default::A", "default::B"))

    def test_self_cycle(self) -> None:
        types = [_obj("a", "default::A", "a")]
        with self.assertRaises(errors.DependencyCycleError) as cm:
            reflection.topo_sort(types)
        self.assertEqual(cm.exception.type_name, "default::A")

    def test_deep_chain(self) -> None:
        """Long inheritance chains do not exhaust the Python stack"""
        n = 5000
        types = [
            _obj(f"t{i}", f"default::T{i}", f"t{i + 1}") for i in range(n)
        ]
        types.append(_obj(f"t{n}", f"default::T{n}"))
        ordered = reflection.topo_sort(types)
        self.assertEqual(ordered[0].name, f"default::T{n}")
        self.assertEqual(ordered[-1].name, "default::T0")

    def test_unresolved_base(self) -> None:
        types = [_obj("a", "default::A", "missing")]
        with self.assertRaises(errors.UnresolvedReferenceError) as cm:
            reflection.SchemaGraph(types)
        self.assertEqual(cm.exception.type_id, "missing")

    def test_unresolved_pointer_target(self) -> None:
        types = reflection.parse_types(
            [
                fx.object_(
                    "a",
                    "default::A",
                    pointers=(fx.pointer("name", "missing"),),
                )
            ]
        )
        with self.assertRaisesRegex(
            errors.UnresolvedReferenceError, "default::A.name"
        ):
            reflection.topo_sort(types)

    def test_unresolved_link_property_target(self) -> None:
        rows = fx.std_rows()
        rows.append(
            fx.object_(
                "a",
                "default::A",
                pointers=(
                    fx.link(
                        "l",
                        fx.OBJECT,
                        pointers=[
                            fx.link("source", fx.OBJECT),
                            fx.link("target", fx.OBJECT),
                            fx.pointer("weight", "missing"),
                        ],
                    ),
                ),
            )
        )
        graph = reflection.SchemaGraph(reflection.parse_types(rows))
        with self.assertRaisesRegex(
            errors.UnresolvedReferenceError, "default::A.l.weight"
        ):
            graph.validate()

    def test_unresolved_array_element(self) -> None:
        types = reflection.parse_types(
            [fx.array("arr", "missing", "array<default::X>")]
        )
        with self.assertRaises(errors.UnresolvedReferenceError):
            reflection.topo_sort(types)

    def test_lookup(self) -> None:
        types = reflection.parse_types(fx.std_rows())
        graph = reflection.SchemaGraph(types)
        self.assertIn(fx.STR, graph)
        self.assertEqual(graph.get(fx.STR).name, "std::str")
        self.assertEqual(graph.get_by_name("std::str").id, fx.STR)
        with self.assertRaises(errors.UnresolvedReferenceError):
            graph.get("nope", "in a test")
