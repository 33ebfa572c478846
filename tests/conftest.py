import json
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# ---------- Resolve project root ----------
HERE = Path(__file__).resolve()
PROJECT_ROOT = HERE.parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

DATA_DIR = HERE.parent / "data"


# ---------- Test fixtures ----------
@pytest.fixture
def fx():
    class _Fx:
        def path(self, name):
            return DATA_DIR / name

        def text(self, name):
            return (DATA_DIR / name).read_text(encoding="utf-8")

        def json(self, name):
            return json.loads((DATA_DIR / name).read_text(encoding="utf-8"))

    return _Fx()


@pytest.fixture
def now():
    """Fixed reference time so ages do not drift with the wall clock."""
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
