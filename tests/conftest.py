import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)


@pytest.fixture(autouse=True)
def _no_real_openai(monkeypatch):
    """Keep tests offline even when a developer has OPENAI_API_KEY exported."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
