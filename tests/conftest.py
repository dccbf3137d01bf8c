import importlib.util
import sys
import builtins
from pathlib import Path

import pytest
from gpiozero import Device
from gpiozero.pins.mock import MockFactory


def load_module():
    script = Path(__file__).resolve().parents[1] / "cos-monitor.py"
    spec = importlib.util.spec_from_file_location("cos_monitor", script)
    mod = importlib.util.module_from_spec(spec)
    sys.modules["cos_monitor"] = mod
    assert spec.loader is not None
    spec.loader.exec_module(mod)
    return mod

# Expose helper for tests without explicit imports.
builtins.load_module = load_module


@pytest.fixture
def mock_factory():
    """gpiozero mock pins, so GPIO code runs without hardware."""
    saved = Device.pin_factory
    factory = MockFactory()
    Device.pin_factory = factory
    yield factory
    factory.reset()
    Device.pin_factory = saved
