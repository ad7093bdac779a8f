"""Base model for towersnatch reference and feed data.

Every model inherits from :class:`SnatchBaseModel` which provides:

* frozen instances, so reference rows can be shared and hashed safely
* ``extra="ignore"`` so catalog dumps may carry additional columns
* ``populate_by_name`` so validation aliases and field names both work
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SnatchBaseModel(BaseModel):
    """Base for all towersnatch models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )
