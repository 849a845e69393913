"""
Shared test fixtures for AGORA Governance Dashboard tests.
"""
import sys
import os
from datetime import datetime, timezone

import pytest

# Ensure project root is importable
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from src.data_store import build_agora_data  # noqa: E402


@pytest.fixture
def fixed_now():
    """A fixed, timezone-aware clock reading."""
    return datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def agora_data(fixed_now):
    """Snapshot anchored to ``fixed_now`` so every timestamp is predictable."""
    return build_agora_data(now=fixed_now)


@pytest.fixture
def live_agora_data():
    """Snapshot anchored to the real clock, for code paths that read 'now' themselves."""
    return build_agora_data()
