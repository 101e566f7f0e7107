# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.


from typing import (
    Any,
    Literal,
    TypeGuard,
    Union,
    get_args,
    get_origin,
)
from typing import _GenericAlias, _SpecialGenericAlias  # type: ignore [attr-defined]  # noqa: PLC2701
from types import GenericAlias, UnionType


def is_generic_alias(t: Any) -> TypeGuard[GenericAlias]:
    return isinstance(t, (GenericAlias, _GenericAlias, _SpecialGenericAlias))


def is_literal(t: Any) -> bool:
    return is_generic_alias(t) and get_origin(t) is Literal


def is_union_type(t: Any) -> bool:
    return (
        (is_generic_alias(t) and get_origin(t) is Union)  # type: ignore [comparison-overlap]
        or isinstance(t, UnionType)
    )


def is_optional_type(t: Any) -> bool:
    return is_union_type(t) and type(None) in get_args(t)


def strip_optional(t: Any) -> Any:
    """Return *t* without its ``None`` member if it is an Optional."""
    if not is_optional_type(t):
        return t
    args = [a for a in get_args(t) if a is not type(None)]
    if len(args) == 1:
        return args[0]
    result = args[0]
    for arg in args[1:]:
        result |= arg
    return result
