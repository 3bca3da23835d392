"""Shared test fixtures."""
import pytest

from activity_overview.models.snapshot import DailyActivitySnapshot

from factories import make_snapshot


@pytest.fixture(name="snapshot")
def snapshot_fixture() -> DailyActivitySnapshot:
    return make_snapshot()
