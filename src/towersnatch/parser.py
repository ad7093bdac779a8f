"""Feed payload decoding.

The feed is a JSON object keyed by region name.  Each value is an object
whose keys are site tokens such as ``"A3"``; only the digits after the
leading letter carry meaning.
"""

from __future__ import annotations

import json
from typing import Any

from towersnatch.exceptions import SnatchParseError
from towersnatch.models.feed import FeedSnapshot


def extract_site_number(token: str) -> int | None:
    """Return the site number encoded in *token*, or ``None``.

    The leading character is always discarded: ``"A3" -> 3``,
    ``"C27" -> 27``.
    """
    digits = token.strip()[1:]
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(digits)


def _tokens(region: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, dict):
        return tuple(str(key) for key in value)
    # An empty PHP array serialises as [] rather than {}.
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise SnatchParseError(f"Sites for region {region!r} are not an object: {type(value).__name__}")


def parse_feed(raw: bytes | str) -> FeedSnapshot:
    """Decode a raw feed body into a :class:`FeedSnapshot`.

    Raises
    ------
    SnatchParseError
        If the body is empty, not JSON, or not an object at the top level.
    """
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    if not text.strip():
        raise SnatchParseError("Feed body is empty")
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SnatchParseError(f"Feed body is not JSON: {text[:64]!r}") from exc
    # PHP encodes an empty associative array as [].
    if decoded == []:
        return FeedSnapshot()
    if not isinstance(decoded, dict):
        raise SnatchParseError(f"Feed body is not an object: {type(decoded).__name__}")

    return FeedSnapshot(regions={str(name): _tokens(name, value) for name, value in decoded.items()})
