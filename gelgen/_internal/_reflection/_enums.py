# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.


from __future__ import annotations

import enum


class StrEnum(str, enum.Enum):
    def __str__(self) -> str:
        return str(self.value)


class Cardinality(StrEnum):
    AtMostOne = "AtMostOne"
    One = "One"
    Many = "Many"
    AtLeastOne = "AtLeastOne"

    def is_multi(self) -> bool:
        return self in {
            Cardinality.AtLeastOne,
            Cardinality.Many,
        }

    def is_optional(self) -> bool:
        return self in {
            Cardinality.AtMostOne,
            Cardinality.Many,
        }

    @classmethod
    def derive(cls, *, multi: bool, required: bool) -> Cardinality:
        """Collapse (single/multi, required/optional) into one value."""
        if multi:
            return cls.AtLeastOne if required else cls.Many
        else:
            return cls.One if required else cls.AtMostOne


class TypeKind(StrEnum):
    Array = "array"
    Object = "object"
    Scalar = "scalar"
    Tuple = "tuple"


class PointerKind(StrEnum):
    Link = "link"
    Property = "property"
