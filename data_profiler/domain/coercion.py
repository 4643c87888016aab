"""
Cell rendering and the shared cell-coercion heuristic.

Every adapter runs its data cells through ``coerce_cell`` once rows are in
matrix form, so ID-like values, leading-zero codes, and numeric-looking text
end up with the same Python type regardless of the source format.
"""

from __future__ import annotations

import json
import math
import re
from datetime import date, datetime, time
from typing import Any, Sequence

from data_profiler.domain.types import CellValue

_LEADING_ZERO = re.compile(r"0[0-9]+")
_ALPHANUMERIC_ID = re.compile(r"[0-9]+[a-zA-Z0-9]*")
_NUMBER = re.compile(r"-?[0-9]+(\.[0-9]+)?")
_DATE_PREFIX = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def render_value(value: Any) -> str:
    """String form of a cell as it appears in the JSON profile.

    Booleans render as ``true``/``false``, integral floats without ``.0``,
    temporal values in ISO format. ``None`` renders as the empty string.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def is_id_header(header: str) -> bool:
    return "id" in header.lower()


def coerce_cell(value: Any, header: str) -> CellValue:
    """Apply the coercion heuristic to one cell given its column header.

    - ID-like header, leading-zero digits, or digit-led alphanumerics -> string
    - plain integer/decimal text -> int/float
    - ISO-like date prefix -> its string form
    - anything else is returned unchanged; ``None`` passes through
    """
    if value is None:
        return None
    text = render_value(value)
    if (
        is_id_header(header)
        or _LEADING_ZERO.match(text)
        or _ALPHANUMERIC_ID.fullmatch(text)
    ):
        return text
    if _NUMBER.fullmatch(text):
        return float(text) if "." in text else int(text)
    if _DATE_PREFIX.match(text):
        return text
    return value


def coerce_row(row: Sequence[Any], headers: Sequence[str]) -> list[CellValue]:
    """Coerce every cell of a row; cells past the header width use an empty header."""
    return [
        coerce_cell(value, headers[i] if i < len(headers) else "")
        for i, value in enumerate(row)
    ]
