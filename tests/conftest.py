from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tests.fixtures import claude_fake  # noqa: E402


@pytest.fixture
def credential() -> claude_fake.FakeTokenCredential:
    """Async token credential that never touches the network."""

    return claude_fake.FakeTokenCredential()
