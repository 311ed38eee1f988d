from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .schema import SETTINGS_SCHEMA, FieldKind, FieldSpec, WalletAuthSettings

log = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "true", "on", "yes", "y"}
_FALSE_STRINGS = {"", "0", "false", "off", "no", "n"}

_MISSING = object()


class ErrorReason(str, Enum):
    INVALID_ENUM = "invalid_enum"
    OUT_OF_RANGE = "out_of_range"
    REQUIRED_EMPTY = "required_empty"
    EMPTY_STRING = "empty_string"


@dataclass(frozen=True)
class FieldError:
    field: str
    reason: ErrorReason
    message: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "reason": self.reason.value, "message": self.message}


@dataclass
class ValidateResult:
    ok: bool
    record: WalletAuthSettings | None = None
    errors: list[FieldError] = field(default_factory=list)
    hints: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"ok": self.ok}
        if self.record is not None:
            d["values"] = self.record.to_storage()
        if self.errors:
            d["errors"] = [e.to_dict() for e in self.errors]
        if self.hints:
            d["hints"] = list(self.hints)
        return d


def truthy_flag(v: Any) -> bool:
    """Normalize checkbox-ish values (bool, 0/1, "on", "yes"...) into bool."""
    if isinstance(v, bool):
        return v
    if v is None:
        return False
    if isinstance(v, (int, float)):
        return v != 0
    return str(v).strip().lower() in _TRUE_STRINGS


def is_checked(v: Any) -> bool:
    """Checkbox group entry: the host posts the option value when checked, 0 when not."""
    if isinstance(v, bool):
        return v
    if v is None:
        return False
    if isinstance(v, (int, float)):
        return v != 0
    return str(v).strip().lower() not in _FALSE_STRINGS


def _parse_int(v: Any) -> int | None:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v) if v.is_integer() else None
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            return None
    return None


def _check_enum_single(spec: FieldSpec, v: Any, errors: list[FieldError]) -> Any:
    if isinstance(v, str) and v in spec.allowed_values:
        return v
    errors.append(
        FieldError(
            spec.key,
            ErrorReason.INVALID_ENUM,
            f"{spec.key}: expected one of {', '.join(spec.allowed_values)}",
        )
    )
    return None


def _check_boolean(spec: FieldSpec, v: Any, errors: list[FieldError]) -> bool:
    if v is _MISSING:
        return bool(spec.default) if spec.default is not None else False
    return truthy_flag(v)


def _check_integer_range(spec: FieldSpec, v: Any, errors: list[FieldError]) -> int | None:
    lo, hi = spec.value_range or (None, None)
    n = None if v is _MISSING else _parse_int(v)
    if n is None or (lo is not None and n < lo) or (hi is not None and n > hi):
        errors.append(
            FieldError(spec.key, ErrorReason.OUT_OF_RANGE, f"{spec.key}: expected an integer in [{lo}, {hi}]")
        )
        return None
    return n


def _check_enum_multi(spec: FieldSpec, v: Any, errors: list[FieldError]) -> list[str] | None:
    if v is _MISSING or v is None:
        checked: set[str] = set()
    elif isinstance(v, Mapping):
        checked = {str(k) for k, flag in v.items() if is_checked(flag)}
    elif isinstance(v, (list, tuple, set, frozenset)):
        checked = {str(x) for x in v if is_checked(x)}
    else:
        checked = {str(v)} if is_checked(v) else set()

    unknown = sorted(checked.difference(spec.allowed_values))
    if unknown:
        errors.append(
            FieldError(spec.key, ErrorReason.INVALID_ENUM, f"{spec.key}: unknown option(s) {', '.join(unknown)}")
        )
        return None

    # Re-materialize in schema order, never in submission order.
    out = [opt for opt in spec.allowed_values if opt in checked]
    if spec.required and not out:
        errors.append(FieldError(spec.key, ErrorReason.REQUIRED_EMPTY, f"{spec.key}: select at least one option"))
        return None
    return out


def _check_string(spec: FieldSpec, v: Any, errors: list[FieldError], hints: list[str]) -> str | None:
    s = "" if v is _MISSING or v is None else str(v).strip()
    if not s:
        errors.append(FieldError(spec.key, ErrorReason.EMPTY_STRING, f"{spec.key}: value is required"))
        return None
    if spec.key == "redirect_on_success" and not s.startswith("/"):
        log.warning("Redirect path %r does not start with '/'", s)
        hints.append(f"{spec.key}: internal paths usually start with '/' (e.g. /user)")
    return s


def validate_submission(raw: Mapping[str, Any]) -> ValidateResult:
    """Validate and normalize a raw submission against the settings schema.

    Every field is checked; all problems are returned together and nothing is
    built unless the whole submission is valid.
    """

    errors: list[FieldError] = []
    hints: list[str] = []
    values: dict[str, Any] = {}

    for spec in SETTINGS_SCHEMA:
        v = raw.get(spec.key, _MISSING)
        if spec.kind is FieldKind.ENUM_SINGLE:
            values[spec.key] = _check_enum_single(spec, v, errors)
        elif spec.kind is FieldKind.BOOLEAN:
            values[spec.key] = _check_boolean(spec, v, errors)
        elif spec.kind is FieldKind.INTEGER_RANGE:
            values[spec.key] = _check_integer_range(spec, v, errors)
        elif spec.kind is FieldKind.ENUM_MULTI:
            values[spec.key] = _check_enum_multi(spec, v, errors)
        else:
            values[spec.key] = _check_string(spec, v, errors, hints)

    if errors:
        return ValidateResult(False, errors=errors, hints=hints)
    return ValidateResult(True, record=WalletAuthSettings(**values), hints=hints)
