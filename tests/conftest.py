import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from calendar_app.database import Database  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def database(tmp_path):
    """A Database on a fresh SQLite file; tables are created by the caller."""

    return Database(f"sqlite+aiosqlite:///{(tmp_path / 'events.db').as_posix()}", echo=False)


@pytest.fixture
def make_payload():
    """Build a valid event payload; keyword overrides of None drop the key."""

    def _make(**overrides):
        payload = {
            "title": "Dentist",
            "description": "Bring the insurance card",
            "start_date": "2024-03-05T10:00:00",
            "end_date": "2024-03-05T11:00:00",
            "color": "#ff8800",
        }
        payload.update(overrides)
        return {key: value for key, value in payload.items() if value is not None}

    return _make
