"""
Coercion of loosely-typed parameter values.

Parameters reach the dispatcher through plain dicts assembled from the
session, the webhook envelope and cached context. Coordinates in particular
arrive in several wire shapes: native floats, ``Decimal``, ints, numeric
strings, or wrapper objects such as ``{"$numberDouble": "-23.55"}``.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from app.exceptions import InvalidArgumentError

# Keys used by JSON number wrappers (Mongo extended JSON, generic {"value": ...}).
NUMBER_WRAPPER_KEYS = ("$numberDouble", "$numberDecimal", "$numberInt", "$numberLong", "value")


def to_float(value: Any) -> float:
    """
    Convert ``value`` to a finite ``float`` or raise ``InvalidArgumentError``.

    Booleans are rejected even though ``bool`` subclasses ``int``, and so are
    NaN and infinities in any wire shape.
    """
    result = _coerce_float(value)
    if not math.isfinite(result):
        raise InvalidArgumentError(f"Valor '{value}' não é um número finito")
    return result


def _coerce_float(value: Any) -> float:
    if value is None:
        raise InvalidArgumentError("Valor não pode ser nulo")
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Não foi possível converter o valor '{value}' para double")
    if isinstance(value, float):
        return value
    if isinstance(value, (int, Decimal)):
        try:
            return float(value)
        except (OverflowError, ValueError):
            raise InvalidArgumentError(
                f"Não foi possível converter o valor '{value}' para double"
            ) from None
    if isinstance(value, str):
        try:
            return float(Decimal(value.strip().replace(",", ".")))
        except (InvalidOperation, ValueError):
            raise InvalidArgumentError(
                f"Não foi possível converter o valor '{value}' para double"
            ) from None
    if isinstance(value, Mapping):
        for key in NUMBER_WRAPPER_KEYS:
            if key in value:
                return to_float(value[key])
        raise InvalidArgumentError(f"Não foi possível converter o valor '{value}' para double")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(
            f"Não foi possível converter o valor '{value}' para double"
        ) from None


def optional_str(value: Any) -> Optional[str]:
    """Return ``str(value)`` stripped, or None for missing/blank values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def has_coordinates(data: Optional[Mapping[str, Any]]) -> bool:
    return bool(data) and "latitude" in data and "longitude" in data
