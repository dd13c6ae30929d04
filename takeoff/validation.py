"""
Validation gate: decides whether a trade form is complete enough to calculate.

Respects conditional fields the same way a question tree respects branches:
- A field with enabled_by is only read while its enabling field matches
  enabled_when. While disabled it is dropped, even if a stale value is
  still sitting in the form, so it can never re-enter a later calculation.
- Required fields (and enabled conditional fields without a default) must be
  present and of the right type.
- Numbers must be finite and non-negative, and inside any hard range.
- Soft bounds never block: they become WarningItems.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .errors import IncompleteInput, InvalidDimension, SoftBoundExceeded
from .pricing_engine import LineItemPricer
from .schemas import FieldKind, FieldSpec, WarningItem

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "yes", "y", "1", "on"}
_FALSE_STRINGS = {"false", "no", "n", "0", "off"}


class _WrongType(Exception):
    pass


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce_number(spec: FieldSpec, value: Any) -> float:
    if isinstance(value, bool):
        raise _WrongType()
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise _WrongType()
    else:
        raise _WrongType()

    if not math.isfinite(number) or number < 0:
        raise InvalidDimension(
            f"{spec.name} must be a finite, non-negative number, got {value!r}"
        )
    if spec.minimum is not None and number < spec.minimum:
        raise InvalidDimension(f"{spec.name} must be at least {spec.minimum:g}, got {number:g}")
    if spec.maximum is not None and number > spec.maximum:
        raise InvalidDimension(f"{spec.name} must be at most {spec.maximum:g}, got {number:g}")
    if spec.choices is not None and number not in [float(c) for c in spec.choices]:
        raise _WrongType()
    if spec.integer:
        if not number.is_integer():
            raise InvalidDimension(f"{spec.name} must be a whole number, got {number:g}")
        return int(number)
    return number


def _coerce_choice(spec: FieldSpec, value: Any) -> str:
    text = str(value).strip()
    if spec.choices is not None and text not in [str(c) for c in spec.choices]:
        raise _WrongType()
    return text


def _coerce_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise _WrongType()


def _coerce(spec: FieldSpec, value: Any) -> Any:
    if spec.kind == FieldKind.NUMBER:
        return _coerce_number(spec, value)
    if spec.kind == FieldKind.BOOLEAN:
        return _coerce_boolean(value)
    return _coerce_choice(spec, value)


def is_enabled(spec: FieldSpec, cleaned: Dict[str, Any]) -> bool:
    """Is this field live given the already-cleaned enabling fields?"""
    if spec.enabled_by is None:
        return True
    if spec.enabled_by not in cleaned:
        return False
    current = cleaned[spec.enabled_by]
    wanted = spec.enabled_when
    if isinstance(wanted, (list, tuple, set)):
        return current in wanted
    if wanted is True:
        return current is True
    return current == wanted


def _resolve(specs: Sequence[FieldSpec], fields: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    """
    Walk specs in declaration order (enablers come before the fields they gate).

    Returns (cleaned, missing). Raises InvalidDimension on the first bad number.
    Fields not named by any spec are ignored.
    """
    fields = fields or {}
    cleaned: Dict[str, Any] = {}
    missing: List[str] = []

    for spec in specs:
        if not is_enabled(spec, cleaned):
            if not _is_blank(fields.get(spec.name)):
                logger.debug("Dropping %s: disabled by %s", spec.name, spec.enabled_by)
            continue

        raw = fields.get(spec.name)
        if _is_blank(raw):
            if spec.default is not None:
                cleaned[spec.name] = spec.default
            elif spec.required:
                missing.append(spec.name)
            continue

        try:
            cleaned[spec.name] = _coerce(spec, raw)
        except _WrongType:
            missing.append(spec.name)

    return cleaned, missing


def missing_fields(specs: Sequence[FieldSpec], fields: Mapping[str, Any]) -> List[str]:
    """Required or enabled fields that are absent or mistyped."""
    _, missing = _resolve(specs, fields)
    return missing


def is_form_valid(specs: Sequence[FieldSpec], fields: Mapping[str, Any]) -> bool:
    """Can this form be calculated as-is?"""
    try:
        _, missing = _resolve(specs, fields)
    except InvalidDimension:
        return False
    return not missing


def get_completion_status(specs: Sequence[FieldSpec], fields: Mapping[str, Any]) -> dict:
    """Detailed status for the form: what is missing and what is invalid."""
    try:
        _, missing = _resolve(specs, fields)
        invalid = None
    except InvalidDimension as e:
        missing = []
        invalid = e.message
    return {
        "valid": not missing and invalid is None,
        "missing": missing,
        "invalid": invalid,
    }


def clean_fields(specs: Sequence[FieldSpec], fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Coerce a raw form into typed values, dropping unknown and disabled fields.

    Raises InvalidDimension for bad numbers, IncompleteInput for anything
    missing or mistyped.
    """
    cleaned, missing = _resolve(specs, fields)
    if missing:
        raise IncompleteInput(missing)
    return cleaned


def soft_bounds_exceeded(specs: Iterable[FieldSpec], cleaned: Dict[str, Any]) -> List[SoftBoundExceeded]:
    exceeded = []
    for spec in specs:
        if spec.soft_max is None or spec.name not in cleaned:
            continue
        value = cleaned[spec.name]
        if value > spec.soft_max:
            exceeded.append(SoftBoundExceeded(
                field=spec.name,
                value=value,
                limit=spec.soft_max,
                message=spec.soft_max_message or f"{spec.label or spec.name} exceeds {spec.soft_max:g}",
            ))
    return exceeded


def soft_bound_warnings(specs: Iterable[FieldSpec], cleaned: Dict[str, Any],
                        pricer: Optional[LineItemPricer] = None) -> List[WarningItem]:
    """One WarningItem per exceeded soft bound. Informational only."""
    pricer = pricer or LineItemPricer()
    return [
        pricer.warning("WARNING", b.limit, b.message)
        for b in soft_bounds_exceeded(specs, cleaned)
    ]
