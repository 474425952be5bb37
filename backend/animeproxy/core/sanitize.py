"""Parameter Sanitizer — raw query mapping → SanitizedParams. Pure, no IO.

Invariants:
    - Never raises: malformed numbers fall back to the field default
    - limit ∈ [1, 100]; end_ep ∈ [1, 10000]; page/season/episode/start_ep ≥ 1
    - Absent in → absent out; blank values count as absent
    - search is capped at 200 chars

Design Decisions:
    - Lenient leading-integer parse: "12abc" → 12, "3.7" → 3
    - A parsed 0 for limit/end_ep falls back to the default rather than clamping to 1
"""

import re
from typing import Any, Callable, Mapping

from animeproxy.core.domain_types import SanitizedParams

SEARCH_MAX_LENGTH = 200
LIMIT_DEFAULT, LIMIT_MAX = 12, 100
END_EP_DEFAULT, END_EP_MAX = 100, 10_000

_LEADING_INT = re.compile(r"^[+-]?\d+")
_MAX_DIGITS = 18


def sanitize_params(raw: Mapping[str, Any]) -> SanitizedParams:
    """Validate, type and default the recognized query parameters."""
    out: SanitizedParams = {}
    for key, rule in _RULES:
        value = _first_value(raw.get(key))
        if value is None:
            continue
        normalized = rule(value)
        if normalized is not None:
            out[key] = normalized  # type: ignore[literal-required]
    return out


def parse_int(value: str) -> int | None:
    """Leading integer of `value`; None if absent or longer than 18 digits."""
    match = _LEADING_INT.match(value.strip())
    if not match or len(match.group()) > _MAX_DIGITS:
        return None
    return int(match.group())


# ─── Field rules ─────────────────────────────────────────────────

def _search(value: str) -> str | None:
    return value.strip()[:SEARCH_MAX_LENGTH] or None


def _text(value: str) -> str | None:
    return value.strip() or None


def _positive(value: str) -> int:
    n = parse_int(value)
    return n if n is not None and n >= 1 else 1


def _clamped(default: int, upper: int) -> Callable[[str], int]:
    def rule(value: str) -> int:
        n = parse_int(value)
        if not n:
            return default
        return min(max(n, 1), upper)
    return rule


def _page(value: str) -> int:
    return max(parse_int(value) or 1, 1)


_RULES: list[tuple[str, Callable[[str], Any]]] = [
    ("search", _search),
    ("slug", _text),
    ("season", _positive),
    ("episode", _positive),
    ("season_id", _text),
    ("start_ep", _positive),
    ("end_ep", _clamped(END_EP_DEFAULT, END_EP_MAX)),
    ("limit", _clamped(LIMIT_DEFAULT, LIMIT_MAX)),
    ("page", _page),
]


def _first_value(value: Any) -> str | None:
    """Collapse a raw query value to one non-blank string, or None."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None
