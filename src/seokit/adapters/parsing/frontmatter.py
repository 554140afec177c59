from __future__ import annotations

from typing import Any

from seokit.utils.dates import parse_date

# Keys whose values are read as dates when they parse as one
_DATE_KEY_MARKERS = ("date", "Date", "At")


def split_frontmatter(raw_text: str) -> tuple[dict[str, Any], str]:
    """
    Split '---' delimited frontmatter from a Markdown document.

    Returns (frontmatter_dict, body). Without an opening fence on the first
    line, or without a closing fence, the whole text is body.
    """
    # Normalize newlines and strip BOM if present
    s = raw_text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")

    lines = s.split("\n")
    if not lines or lines[0].strip() != "---":
        return {}, s.strip()

    end_idx = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end_idx = i
            break

    if end_idx is None:
        return {}, s.strip()

    frontmatter = parse_frontmatter("\n".join(lines[1:end_idx]))
    body = "\n".join(lines[end_idx + 1:]).strip()
    return frontmatter, body


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _is_date_key(key: str) -> bool:
    return any(marker in key for marker in _DATE_KEY_MARKERS)


def parse_frontmatter(text: str) -> dict[str, Any]:
    """
    Minimal line-oriented 'key: value' reader (not YAML).

    - blank lines and '#' comments are skipped
    - one matching pair of surrounding quotes is stripped
    - [a, b, c] becomes a list of strings
    - true/false become booleans
    - keys containing 'date', 'Date' or 'At' hold datetimes when the value
      parses as an ISO-8601 date
    """
    result: dict[str, Any] = {}

    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if ":" not in stripped:
            continue

        key, raw_value = stripped.split(":", 1)
        key = key.strip()
        if not key:
            continue

        value: Any = _unquote(raw_value.strip())

        if value.startswith("[") and value.endswith("]"):
            inner = value[1:-1].strip()
            value = [_unquote(v.strip()) for v in inner.split(",") if v.strip()]
        elif value == "true":
            value = True
        elif value == "false":
            value = False
        elif _is_date_key(key):
            parsed = parse_date(value)
            if parsed is not None:
                value = parsed

        result[key] = value

    return result
