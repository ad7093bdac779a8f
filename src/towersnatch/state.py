"""Last-known unplanted sites, used as the baseline for change detection.

The baseline has three observable shapes:

* ``UNKNOWN``: nothing has been observed since the process started
* an empty :class:`SiteBaseline`: the last check saw no unplanted sites
* a populated :class:`SiteBaseline`

Keeping ``UNKNOWN`` as its own type means the "first poll is never
announced" rule is a type check instead of a ``None`` comparison.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import Literal, TypeAlias

from pydantic import Field

from towersnatch.models._base import SnatchBaseModel
from towersnatch.models.site import UnclaimedSiteRef


class _Unknown(enum.Enum):
    UNKNOWN = "unknown"

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN: Literal[_Unknown.UNKNOWN] = _Unknown.UNKNOWN


class SiteBaseline(SnatchBaseModel):
    """Unplanted sites seen by the last successful check, in feed order."""

    refs: tuple[UnclaimedSiteRef, ...] = Field(default_factory=tuple)

    @classmethod
    def of(cls, refs: Iterable[UnclaimedSiteRef]) -> SiteBaseline:
        return cls(refs=tuple(refs))

    def new_since(self, refs: Iterable[UnclaimedSiteRef]) -> list[UnclaimedSiteRef]:
        """Return the *refs* not contained in this baseline, keeping their order."""
        known = frozenset(self.refs)
        return [ref for ref in refs if ref not in known]


LastKnownState: TypeAlias = SiteBaseline | Literal[_Unknown.UNKNOWN]
