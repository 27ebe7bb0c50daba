"""Response grammars shared by beacon adapters.

Providers answer in a handful of dialects: a bare "yes"/"no", a JSON
boolean, a JSON hit count, or an HTML page. These helpers turn each dialect
into a tri-state answer. None of them raises: anything unexpected is `None`
(unknown), never `False`.
"""

from __future__ import annotations

import json
import re
from typing import Any

from core.domain.models import Answer

_YES = re.compile(r"\byes\b", re.IGNORECASE)
_NO = re.compile(r"\bno\b", re.IGNORECASE)

_TRUE_TOKENS = frozenset({"yes", "true", "found", "1"})
_FALSE_TOKENS = frozenset({"no", "false", "not found", "0"})


def parse_yes_no(text: str | None) -> Answer:
    """Free-text yes/no, case-insensitive.

    Both words present (or neither) is ambiguous and returns `None`.
    """

    if not text:
        return None
    has_yes = bool(_YES.search(text))
    has_no = bool(_NO.search(text))
    if has_yes == has_no:
        return None
    return has_yes


def parse_token(value: Any) -> Answer:
    """Interpret a scalar JSON value (bool, yes/no string, 0/1) as an answer."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value > 0 if value >= 0 else None
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
    return None


def load_json(text: str | None) -> Any:
    """`json.loads` that returns `None` instead of raising."""

    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


def dig(data: Any, path: tuple[str, ...]) -> Any:
    """Follow `path` through nested dicts; `None` when any hop is missing."""

    current = data
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current


def parse_json_field(text: str | None, *paths: tuple[str, ...]) -> Answer:
    """Answer from the first JSON field in `paths` that holds a usable token."""

    data = load_json(text)
    for path in paths:
        answer = parse_token(dig(data, path))
        if answer is not None:
            return answer
    return None


def parse_json_count(text: str | None, *paths: tuple[str, ...]) -> Answer:
    """Answer from a JSON hit count: >0 is `True`, 0 is `False`."""

    data = load_json(text)
    for path in paths:
        value = dig(data, path)
        if isinstance(value, bool):
            continue
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value.strip())
        if isinstance(value, int) and value >= 0:
            return value > 0
    return None
