# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

from __future__ import annotations

import textwrap
import unittest

from gelgen import errors
from gelgen._internal import _reflection as reflection
from gelgen._internal._codegen import _emitter

from tests import schema_fixtures as fx


HEADER = "// test header"


def _generate(rows: list[dict]) -> dict[str, str]:
    types = reflection.parse_types(rows)
    tree = _emitter.generate_tree(types, preamble=HEADER)
    return tree.render()


class TestSchemaEmitter(unittest.TestCase):
    def setUp(self) -> None:
        self.files = _generate(fx.schema_rows())

    def test_file_layout(self) -> None:
        self.assertEqual(
            sorted(self.files),
            [
                "__spec__.ts",
                "__types__/default.ts",
                "__types__/other.ts",
                "__types__/std.ts",
                "index.ts",
                "modules/default.ts",
                "modules/other.ts",
                "modules/std.ts",
            ],
        )

    def test_every_file_starts_with_header(self) -> None:
        for path, text in self.files.items():
            with self.subTest(path=path):
                self.assertTrue(text.startswith(HEADER + "\n"))
                self.assertTrue(text.endswith("\n"))

    def test_enum(self) -> None:
        self.assertIn(
            textwrap.dedent("""\
                export enum Color {
                  Red = "Red",
                  Green = "Green",
                  light_blue = "light blue",
                }
            """),
            self.files["modules/default.ts"],
        )

    def test_enum_precedes_type_handles(self) -> None:
        text = self.files["modules/default.ts"]
        self.assertLess(
            text.index("export enum Color"),
            text.index("export const Person"),
        )

    def test_interface(self) -> None:
        text = self.files["__types__/default.ts"]
        self.assertIn(
            "export interface Person extends stdTypes.Object {", text
        )
        for line in [
            "name: $.PropertyDesc<string, $.Cardinality.One>;",
            "nickname: $.PropertyDesc<string, $.Cardinality.AtMostOne>;",
            "tags: $.PropertyDesc<string[], $.Cardinality.Many>;",
            "color: $.PropertyDesc<defaultEnums.Color, "
            "$.Cardinality.AtMostOne>;",
            "slug: $.PropertyDesc<string, $.Cardinality.AtMostOne>;",
            "runtime: $.PropertyDesc<edgedb.Duration, "
            "$.Cardinality.AtMostOne>;",
            "point: $.PropertyDesc<{x: number, y: string}, "
            "$.Cardinality.AtMostOne>;",
            "pair: $.PropertyDesc<[number, string], "
            "$.Cardinality.AtMostOne>;",
            "balance: $.PropertyDesc<unknown, $.Cardinality.AtMostOne>;",
            "best_friend: $.LinkDesc<Person, $.Cardinality.AtMostOne>;",
            "friends: $.LinkDesc<Person, $.Cardinality.Many>;",
            "cast: $.LinkDesc<Person, $.Cardinality.AtLeastOne>;",
        ]:
            with self.subTest(line=line):
                self.assertIn(f"  {line}\n", text)

    def test_interface_imports(self) -> None:
        text = self.files["__types__/default.ts"]
        self.assertIn(
            textwrap.dedent("""\
                import * as edgedb from "edgedb";
                import {reflection as $} from "edgedb";
                import type * as defaultEnums from "../modules/default";
                import type * as stdTypes from "./std";
            """),
            text,
        )

    def test_interface_same_module_base(self) -> None:
        text = self.files["__types__/std.ts"]
        self.assertIn("export interface Object extends BaseObject {", text)
        self.assertIn("export interface BaseObject {", text)

    def test_cross_module_references(self) -> None:
        text = self.files["__types__/other.ts"]
        self.assertIn(
            'import type * as defaultTypes from "./default";', text
        )
        self.assertIn(
            "owner: $.LinkDesc<defaultTypes.Person, $.Cardinality.One>;",
            text,
        )
        self.assertIn(
            "favourite: $.LinkDesc<defaultTypes.Person | "
            "defaultTypes.Movie, $.Cardinality.AtMostOne>;",
            text,
        )
        self.assertIn(
            "since: $.PropertyDesc<edgedb.LocalDate, "
            "$.Cardinality.AtMostOne>;",
            text,
        )

    def test_union_has_no_interface(self) -> None:
        for path, text in self.files.items():
            with self.subTest(path=path):
                self.assertNotIn("interface Person | ", text)
                self.assertNotIn("const Person | ", text)

    def test_type_handle(self) -> None:
        text = self.files["modules/default.ts"]
        self.assertIn(
            textwrap.dedent("""\
                export const Person = $.objectType<__types__.Person>(
                  __spec__,
                  "default::Person",
                );
            """),
            text,
        )
        self.assertIn('import {spec as __spec__} from "../__spec__";', text)
        self.assertIn(
            'import type * as __types__ from "../__types__/default";', text
        )

    def test_spec_entry(self) -> None:
        text = self.files["__spec__.ts"]
        self.assertIn(
            "export const spec: $.TypesSpec = new $.StrictMap();", text
        )
        self.assertIn(
            textwrap.dedent("""\
                spec.set("default::Movie", {
                  name: "default::Movie",
                  bases: ["std::Object"],
                  ancestors: ["std::Object","std::BaseObject"],
                  properties: [
                    {
                      name: "title",
                      cardinality: $.Cardinality.One,
                    },
                  ],
                  links: [
                    {
                      name: "cast",
                      cardinality: $.Cardinality.AtLeastOne,
                      target: "default::Person",
                      properties: [
                      ],
                    },
                  ],
                });
            """),
            text,
        )

    def test_spec_includes_compound_types(self) -> None:
        self.assertIn(
            'spec.set("default::Person | default::Movie", {',
            self.files["__spec__.ts"],
        )

    def test_spec_follows_graph_order(self) -> None:
        text = self.files["__spec__.ts"]
        positions = [
            text.index(f'spec.set("{name}"')
            for name in ("std::BaseObject", "std::Object", "default::Person")
        ]
        self.assertEqual(positions, sorted(positions))

    def test_link_properties(self) -> None:
        """Only links with user-defined link properties list them"""
        text = self.files["__spec__.ts"]
        friends = text[text.index('name: "friends"'):]
        friends = friends[:friends.index("\n    },")]
        self.assertIn('name: "strength"', friends)
        self.assertNotIn('name: "source"', friends)
        self.assertNotIn('name: "target"', friends)

        enemies = text[text.index('name: "enemies"'):]
        enemies = enemies[:enemies.index("\n    },")]
        self.assertIn("properties: [\n      ],", enemies)

    def test_index(self) -> None:
        self.assertEqual(
            self.files["index.ts"],
            textwrap.dedent("""\
                // test header

                export * as default from "./modules/default";
                export * as other from "./modules/other";
                export * as std from "./modules/std";
            """),
        )

    def test_output_is_deterministic(self) -> None:
        self.assertEqual(_generate(fx.schema_rows()), self.files)

    def test_emission_is_idempotent(self) -> None:
        types = reflection.parse_types(fx.schema_rows())
        emitter = _emitter.SchemaEmitter(types, preamble=HEADER)
        self.assertEqual(emitter.emit().render(), emitter.emit().render())

    def test_runtime_module(self) -> None:
        types = reflection.parse_types(fx.schema_rows())
        tree = _emitter.generate_tree(
            types, runtime_module="gel", preamble=HEADER
        )
        text = tree.render()["__types__/default.ts"]
        self.assertIn('import {reflection as $} from "gel";', text)
        self.assertNotIn('"edgedb"', text)


class TestCompoundTypes(unittest.TestCase):
    def setUp(self) -> None:
        self.files = _generate(
            [
                fx.object_("a", "default::A"),
                fx.object_("b", "default::B"),
                fx.object_(
                    "u", "default::A | default::B", union_of=("a", "b")
                ),
                fx.object_(
                    "i", "default::A & default::B", intersection_of=("a", "b")
                ),
            ]
        )

    def test_spec_entries(self) -> None:
        spec = self.files["__spec__.ts"]
        self.assertIn('spec.set("default::A | default::B", {', spec)
        self.assertIn('spec.set("default::A & default::B", {', spec)

    def test_members_keep_their_module(self) -> None:
        text = self.files["__types__/default.ts"]
        self.assertIn("export interface A ", text)
        self.assertIn("export interface B ", text)

    def test_no_declarations_for_compounds(self) -> None:
        for path, text in self.files.items():
            with self.subTest(path=path):
                self.assertNotIn("interface A |", text)
                self.assertNotIn("interface A &", text)
                self.assertNotIn("const A |", text)
                self.assertNotIn("const A &", text)


class TestSchemaEmitterErrors(unittest.TestCase):
    def test_unresolved_reference_emits_nothing(self) -> None:
        rows = fx.std_rows()
        rows.append(
            fx.object_(
                "x",
                "default::X",
                pointers=(fx.link("l", "missing"),),
            )
        )
        emitter = _emitter.SchemaEmitter(reflection.parse_types(rows))
        with self.assertRaises(errors.UnresolvedReferenceError):
            emitter.emit()

    def test_cycle(self) -> None:
        rows = [
            fx.object_("a", "default::A", bases=("b",)),
            fx.object_("b", "default::B", bases=("a",)),
        ]
        with self.assertRaises(errors.DependencyCycleError):
            _generate(rows)

    def test_invalid_name(self) -> None:
        rows = [fx.object_("a", "A")]
        with self.assertRaises(errors.InvalidNameError):
            _generate(rows)

    def test_empty_schema(self) -> None:
        files = _generate([])
        self.assertEqual(list(files), ["__spec__.ts"])
