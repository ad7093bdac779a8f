from __future__ import annotations

import pytest

from _support import CATALOG_DATA
from towersnatch.catalog import InMemorySiteCatalog


@pytest.fixture
def catalog() -> InMemorySiteCatalog:
    return InMemorySiteCatalog.from_dict(CATALOG_DATA)
