from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


# ========== backend/tests/conftest.py -> backend/ ==========
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    # Ensure `import app...` works when running pytest without an editable install.
    sys.path.insert(0, str(BACKEND_ROOT))


def _env_flag(name: str, *, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests (no external services)")
    config.addinivalue_line("markers", "integration: integration tests (external services)")
    config.addinivalue_line("markers", "requires_opensearch: needs a reachable Wazuh indexer")


def pytest_runtest_setup(item: pytest.Item) -> None:
    # Keep unit tests runnable on a developer machine without bringing up infra.
    if "requires_opensearch" in item.keywords and not _env_flag("RUN_OPENSEARCH_TESTS"):
        pytest.skip("Set RUN_OPENSEARCH_TESTS=1 to run indexer-dependent tests.")
