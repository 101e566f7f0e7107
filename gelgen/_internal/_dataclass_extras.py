# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

from typing import (
    Any,
    TypeVar,
)

import dataclasses
import enum
import functools
import typing

from collections.abc import Mapping

from . import _typing_inspect

T = TypeVar("T")


@functools.cache
def _field_types(cls: type[Any]) -> dict[str, Any]:
    return typing.get_type_hints(cls)


def _get(obj: Any, name: str, default: Any) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    else:
        return getattr(obj, name, default)


def coerce_to_dataclass(cls: type[T], obj: Any) -> T:
    """Reconstruct a dataclass from a mapping or a dataclass-like object,
    including all nested dataclass-like values.

    Missing keys fall back to the field default; a missing key for an
    optional field without a default becomes ``None``.  Raises
    ``KeyError`` when a required field is absent.
    """
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a dataclass")
    if isinstance(obj, type):
        raise TypeError(f"{obj!r} is not a dataclass instance or a mapping")

    hints = _field_types(cls)
    new_kwargs = {}
    missing = object()
    for field in dataclasses.fields(cls):
        if not field.init:
            continue
        field_type = hints[field.name]
        value = _get(obj, field.name, missing)
        if value is missing:
            if (
                field.default is not dataclasses.MISSING
                or field.default_factory is not dataclasses.MISSING
            ):
                continue
            elif _typing_inspect.is_optional_type(field_type):
                value = None
            else:
                raise KeyError(
                    f"{cls.__name__}: missing required field {field.name!r}"
                )

        new_kwargs[field.name] = _coerce_value(field_type, value)

    return cls(**new_kwargs)


def _coerce_value(field_type: Any, value: Any) -> Any:
    if value is None:
        return None

    field_type = _typing_inspect.strip_optional(field_type)

    if _typing_inspect.is_literal(field_type):
        literal = typing.get_args(field_type)[0]
        if isinstance(literal, enum.Enum):
            return type(literal)(value)
        return value
    elif isinstance(field_type, type) and dataclasses.is_dataclass(
        field_type
    ):
        return coerce_to_dataclass(field_type, value)
    elif isinstance(field_type, type) and issubclass(field_type, enum.Enum):
        return field_type(value)
    elif _typing_inspect.is_generic_alias(field_type):
        origin = typing.get_origin(field_type)
        if origin in {list, tuple, set, frozenset}:
            element_type = typing.get_args(field_type)[0]
            return origin(_coerce_value(element_type, v) for v in value)
        elif origin is dict:
            element_type = typing.get_args(field_type)[1]
            return {
                k: _coerce_value(element_type, v) for k, v in value.items()
            }

    return value
