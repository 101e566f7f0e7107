# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""EdgeQL query builder expressions"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

import abc
import enum
from dataclasses import dataclass, field

from gelgen import errors

from ._literals import literal_to_edgeql
from ._protocols import edgeql
from ._typesystem import (
    AnyType,
    MaterialType,
    ObjectType,
    is_object_type,
)

if TYPE_CHECKING:
    from collections.abc import Iterable


class ExprKind(enum.Enum):
    PathNode = "PathNode"
    PathLeaf = "PathLeaf"
    Literal = "Literal"
    Set = "Set"


@dataclass(kw_only=True, frozen=True)
class Expr(abc.ABC):
    element: AnyType | None

    @property
    @abc.abstractmethod
    def kind(self) -> ExprKind: ...

    @abc.abstractmethod
    def __edgeql_expr__(self) -> str: ...

    def to_edgeql(self) -> str:
        return edgeql(self)

    def __str__(self) -> str:
        return self.to_edgeql()


@dataclass(kw_only=True, frozen=True)
class PathParent:
    """The link a path step is reached through."""

    type: PathNode | PathLeaf
    link_name: str


@dataclass(kw_only=True, frozen=True)
class PathNode(Expr):
    """A path ending in an object type (a type root or a link)."""

    element: ObjectType
    parent: PathParent | None = None

    @property
    def kind(self) -> ExprKind:
        return ExprKind.PathNode

    def __edgeql_expr__(self) -> str:
        return _render_path(self.element, self.parent)


@dataclass(kw_only=True, frozen=True)
class PathLeaf(Expr):
    """A path ending in a property."""

    element: MaterialType
    parent: PathParent

    @property
    def kind(self) -> ExprKind:
        return ExprKind.PathLeaf

    def __edgeql_expr__(self) -> str:
        return _render_path(self.element, self.parent)


def _render_path(element: AnyType, parent: PathParent | None) -> str:
    if parent is None:
        return element.name
    return f"{edgeql(parent.type)}.{parent.link_name}"


@dataclass(kw_only=True, frozen=True)
class Literal(Expr):
    element: MaterialType
    value: Any

    @property
    def kind(self) -> ExprKind:
        return ExprKind.Literal

    def __edgeql_expr__(self) -> str:
        return literal_to_edgeql(self.element, self.value)


@dataclass(kw_only=True, frozen=True)
class Set(Expr):
    """A set constructor over expressions of one kind.

    Members are either all object-typed or all non-object-typed;
    anything else is rejected at construction.
    """

    exprs: tuple[Expr, ...] = ()
    element: AnyType | None = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "exprs", tuple(self.exprs))
        if not self.exprs:
            return
        object_typed = {is_object_type(e.element) for e in self.exprs}
        if len(object_typed) > 1:
            raise errors.InvalidSetError(
                _element_name(e) for e in self.exprs
            )
        if self.element is None:
            object.__setattr__(self, "element", self.exprs[0].element)

    @property
    def kind(self) -> ExprKind:
        return ExprKind.Set

    def __edgeql_expr__(self) -> str:
        if not self.exprs:
            return "{}"
        return f"{{ {', '.join(edgeql(e) for e in self.exprs)} }}"


def _element_name(expr: Expr) -> str:
    el = expr.element
    return el.name if el is not None else "<empty set>"


def set_of(*exprs: Expr) -> Set:
    return Set(exprs=exprs)


def literal(type_: MaterialType, value: Any) -> Literal:
    return Literal(element=type_, value=value)


def path(
    root: ObjectType,
    steps: Iterable[tuple[str, AnyType]] = (),
) -> PathNode | PathLeaf:
    """Build a path from *root* through ``(link_name, target)`` steps.

    Object-typed targets yield further path nodes; the first
    non-object target ends the path in a leaf.
    """
    result: PathNode | PathLeaf = PathNode(element=root)
    for link_name, target in steps:
        if isinstance(result, PathLeaf):
            raise errors.QueryBuilderError(
                f"cannot follow {link_name!r} from a property path"
            )
        parent = PathParent(type=result, link_name=link_name)
        if isinstance(target, ObjectType):
            result = PathNode(element=target, parent=parent)
        else:
            result = PathLeaf(element=target, parent=parent)
    return result
