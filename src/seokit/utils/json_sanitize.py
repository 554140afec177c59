from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping

from seokit.utils.dates import to_iso8601


def json_sanitize(x: Any) -> Any:
    """
    Convert the toolkit's values into JSON-safe types.
    - datetime/date -> ISO-8601 string
    - Path -> str
    - dataclasses -> dicts
    - set/tuple -> list
    - mappings/sequences -> recursively sanitized
    - unknown objects -> str(x)
    """
    if x is None or isinstance(x, (str, int, float, bool)):
        return x

    if isinstance(x, (datetime, date)):
        return to_iso8601(x)

    if isinstance(x, Path):
        return str(x)

    if is_dataclass(x) and not isinstance(x, type):
        return json_sanitize(asdict(x))

    if isinstance(x, set):
        return [json_sanitize(v) for v in sorted(x, key=lambda v: str(v))]

    if isinstance(x, (tuple, list)):
        return [json_sanitize(v) for v in x]

    if isinstance(x, Mapping):
        return {str(k): json_sanitize(v) for k, v in x.items()}

    return str(x)
