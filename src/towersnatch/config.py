"""Client configuration for towersnatch."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from towersnatch._constants import FEED_URL, POLL_INTERVAL, POLL_TIMEOUT, QUERY_TIMEOUT
from towersnatch.exceptions import SnatchConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        result = float(value)
    except ValueError as exc:
        raise SnatchConfigError(f"{env_key} must be a number, got {value!r}") from exc
    if result <= 0:
        raise SnatchConfigError(f"{env_key} must be positive, got {value!r}")
    return result


@dataclasses.dataclass(frozen=True)
class SnatchConfig:
    """Client configuration.

    Parameters
    ----------
    feed_url : str
        Endpoint listing the currently unplanted tower sites.
    query_timeout : float
        Fetch deadline in seconds for an interactive ``snatch`` request.
    poll_timeout : float
        Fetch deadline in seconds for the periodic poll.
    poll_interval : float
        Seconds between two periodic polls.  Defaults to 30 minutes.
    announce_enabled : bool
        Whether the periodic announcement of new sites runs at all.
    bot_name : str or None
        Name substituted for the ``<myname>`` token in chat commands.
        When ``None`` the token is left for the host to expand.
    catalog_path : str or None
        Path to a JSON reference catalog of regions and tower sites.
    """

    feed_url: str = FEED_URL
    query_timeout: float = QUERY_TIMEOUT
    poll_timeout: float = POLL_TIMEOUT
    poll_interval: float = POLL_INTERVAL
    announce_enabled: bool = True
    bot_name: str | None = None
    catalog_path: str | None = None

    @classmethod
    def from_env(cls, **overrides: Any) -> SnatchConfig:
        """Create configuration from ``SNATCH_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        SnatchConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "SNATCH_FEED_URL": "feed_url",
            "SNATCH_BOT_NAME": "bot_name",
            "SNATCH_CATALOG": "catalog_path",
        }
        _ENV_FLOAT_MAP = {
            "SNATCH_QUERY_TIMEOUT": "query_timeout",
            "SNATCH_POLL_TIMEOUT": "poll_timeout",
            "SNATCH_POLL_INTERVAL": "poll_interval",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = val

        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        if "announce_enabled" not in overrides:
            config_kwargs["announce_enabled"] = _env_bool(env.get("SNATCH_ANNOUNCE_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
