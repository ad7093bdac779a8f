"""Custom exception hierarchy for towersnatch."""

from __future__ import annotations


class SnatchError(Exception):
    """Base exception for all towersnatch errors."""


class SnatchConfigError(SnatchError):
    """Invalid or missing configuration."""


class SnatchCatalogError(SnatchError):
    """Reference catalog could not be loaded or is inconsistent."""


class SnatchTransportError(SnatchError):
    """HTTP-level failure (network, timeout, non-200)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class SnatchParseError(SnatchError):
    """Feed payload is not a JSON object of regions."""


class RegionResolutionError(SnatchError):
    """A region name from the feed is not known to the catalog.

    Only raised on the interactive path; unattended polls skip the
    region instead.
    """

    def __init__(self, region: str) -> None:
        self.region = region
        super().__init__(f"Playfield '{region}' could not be found.")
