# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""Encoding of Python values as EdgeQL literals"""

from __future__ import annotations
from typing import Any

import datetime
import math
from collections.abc import Mapping

from gelgen import errors

from ._typesystem import (
    AnyType,
    ArrayType,
    NamedTupleType,
    TypeKind,
    UnnamedTupleType,
)


BIGINT = "std::bigint"


def literal_to_edgeql(type_: AnyType, value: Any) -> str:
    """Render *value* as a literal of *type_*, cast to that type.

    The cast is applied once, to the outermost literal; nested values
    are encoded bare and rely on the enclosing cast.
    """
    return f"<{type_.name}>{encode_value(type_, value)}"


def encode_value(type_: AnyType, value: Any) -> str:
    if type_.kind is TypeKind.object:
        raise errors.LiteralEncodingError(
            f"cannot encode a literal of object type {type_.name}"
        )

    if type_.kind is TypeKind.scalar:
        return _encode_scalar(type_.name, value)
    elif isinstance(type_, ArrayType):
        return _encode_array(type_, value)
    elif isinstance(type_, UnnamedTupleType):
        return _encode_unnamed_tuple(type_, value)
    elif isinstance(type_, NamedTupleType):
        return _encode_named_tuple(type_, value)
    else:
        raise _invalid(type_, value)


def _invalid(type_: AnyType, value: Any) -> errors.LiteralEncodingError:
    return errors.LiteralEncodingError(
        f"invalid value for type {type_.name}: {value!r}"
    )


def _encode_scalar(name: str, value: Any) -> str:
    if isinstance(value, str):
        # Quotes inside the value are not escaped.
        return f"'{value}'"
    # bool is a subclass of int
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, int):
        return f"{value}n" if name == BIGINT else str(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise errors.LiteralEncodingError(
                f"cannot encode non-finite number {value!r} as {name}"
            )
        return repr(value)
    # datetime is a subclass of date
    elif isinstance(value, datetime.datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            utc = value.astimezone(datetime.timezone.utc)
            return f"'{utc.replace(tzinfo=None).isoformat()}Z'"
        return f"'{value.isoformat()}'"
    elif isinstance(value, (datetime.date, datetime.time)):
        return f"'{value.isoformat()}'"
    elif isinstance(value, datetime.timedelta):
        return f"'{format_duration(value)}'"
    else:
        raise errors.LiteralEncodingError(
            f"invalid value for type {name}: {value!r}"
        )


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _encode_array(type_: ArrayType, value: Any) -> str:
    if not _is_sequence(value):
        raise _invalid(type_, value)
    items = [encode_value(type_.element, el) for el in value]
    return f"[{', '.join(items)}]"


def _encode_unnamed_tuple(type_: UnnamedTupleType, value: Any) -> str:
    if not _is_sequence(value):
        raise _invalid(type_, value)
    if len(value) != len(type_.items):
        raise errors.LiteralEncodingError(
            f"{type_.name} expects {len(type_.items)} elements, "
            f"got {len(value)}"
        )
    items = [encode_value(t, el) for t, el in zip(type_.items, value)]
    return f"( {', '.join(items)} )"


def _encode_named_tuple(type_: NamedTupleType, value: Any) -> str:
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        value = value._asdict()
    if not isinstance(value, Mapping):
        raise _invalid(type_, value)

    missing = [k for k in type_.shape if k not in value]
    extra = [k for k in value if k not in type_.shape]
    if missing or extra:
        raise errors.LiteralEncodingError(
            f"{type_.name} does not match the value: "
            f"missing {missing}, unexpected {extra}"
        )
    items = [
        f"{key} := {encode_value(el_type, value[key])}"
        for key, el_type in type_.shape.items()
    ]
    return f"( {', '.join(items)} )"


def format_duration(value: datetime.timedelta) -> str:
    """Format *value* as an ISO 8601 duration, e.g. ``PT1H30M``."""
    us = value // datetime.timedelta(microseconds=1)
    sign = "-" if us < 0 else ""
    us = abs(us)

    hours, us = divmod(us, 3_600_000_000)
    minutes, us = divmod(us, 60_000_000)
    seconds, us = divmod(us, 1_000_000)

    parts = []
    if hours:
        parts.append(f"{hours}H")
    if minutes:
        parts.append(f"{minutes}M")
    if seconds or us or not parts:
        frac = f".{us:06d}".rstrip("0") if us else ""
        parts.append(f"{seconds}{frac}S")

    return f"{sign}PT{''.join(parts)}"
