# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

from __future__ import annotations
from typing import Literal

import dataclasses
import enum
import unittest

from gelgen._internal._dataclass_extras import coerce_to_dataclass


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


@dataclasses.dataclass
class SimpleDataclass:
    value: str
    number: int


@dataclasses.dataclass
class NestedDataclass:
    name: str
    children: tuple[SimpleDataclass, ...] = ()
    child: SimpleDataclass | None = None


@dataclasses.dataclass
class TaggedDataclass:
    color: Color
    kind: Literal[Color.RED] = Color.RED
    mapping: dict[str, Color] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class OptionalDataclass:
    name: str
    comment: str | None


class TestCoerceToDataclass(unittest.TestCase):
    def test_simple_dataclass_from_dict(self) -> None:
        """Test basic dataclass coercion from dict"""
        result = coerce_to_dataclass(
            SimpleDataclass, {"value": "test", "number": 42}
        )
        self.assertEqual(result, SimpleDataclass(value="test", number=42))

    def test_simple_dataclass_from_object(self) -> None:
        """Test basic dataclass coercion from object with attributes"""

        class DataSource:
            def __init__(self) -> None:
                self.value = "test"
                self.number = 42

        result = coerce_to_dataclass(SimpleDataclass, DataSource())
        self.assertEqual(result, SimpleDataclass(value="test", number=42))

    def test_nested(self) -> None:
        result = coerce_to_dataclass(
            NestedDataclass,
            {
                "name": "parent",
                "children": [{"value": "a", "number": 1}],
                "child": {"value": "b", "number": 2},
            },
        )
        self.assertEqual(
            result.children, (SimpleDataclass(value="a", number=1),)
        )
        self.assertIsInstance(result.children, tuple)
        self.assertEqual(result.child, SimpleDataclass(value="b", number=2))

    def test_defaults(self) -> None:
        result = coerce_to_dataclass(NestedDataclass, {"name": "parent"})
        self.assertEqual(result.children, ())
        self.assertIsNone(result.child)

    def test_enums(self) -> None:
        result = coerce_to_dataclass(
            TaggedDataclass,
            {"color": "green", "kind": "red", "mapping": {"x": "red"}},
        )
        self.assertIs(result.color, Color.GREEN)
        self.assertIs(result.kind, Color.RED)
        self.assertEqual(result.mapping, {"x": Color.RED})

    def test_optional_missing(self) -> None:
        result = coerce_to_dataclass(OptionalDataclass, {"name": "x"})
        self.assertIsNone(result.comment)

    def test_required_missing(self) -> None:
        with self.assertRaises(KeyError):
            coerce_to_dataclass(SimpleDataclass, {"value": "x"})

    def test_invalid_enum_value(self) -> None:
        with self.assertRaises(ValueError):
            coerce_to_dataclass(TaggedDataclass, {"color": "purple"})

    def test_not_a_dataclass(self) -> None:
        with self.assertRaises(TypeError):
            coerce_to_dataclass(dict, {})  # type: ignore [arg-type]
