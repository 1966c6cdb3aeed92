"""
Pytest configuration and shared fixtures.

Provides:
- Logging setup
- Isolation of global configuration and environment between tests
- Device registry cleanup
"""

import os
import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import callshape
from callshape.config import ENV_PREFIX


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def pytest_configure(config):
    """Register markers."""
    config.addinivalue_line(
        "markers", "cuda: marks tests that need a CUDA device"
    )


def pytest_collection_modifyitems(config, items):
    import torch

    if torch.cuda.is_available():
        return
    skip_cuda = pytest.mark.skip(reason="CUDA not available")
    for item in items:
        if "cuda" in item.keywords:
            item.add_marker(skip_cuda)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Strip CALLSHAPE_* variables and reset global config/device registry."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
    callshape.set_config(None)
    callshape.clear_devices()
    yield
    callshape.set_config(None)
    callshape.clear_devices()


@pytest.fixture
def cpu_device():
    return callshape.get_device("cpu")
