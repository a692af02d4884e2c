import random
import sys
from pathlib import Path

import pytest
import yaml

# Make the src layout importable without an install
src_dir = Path(__file__).parent.parent.absolute() / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from ledchain.core.config import ChaserConfig, FlareConfig, SessionConfig


@pytest.fixture
def rng():
    """Deterministic random source"""
    return random.Random(1234)


@pytest.fixture
def session_config():
    """Small single-chaser session that draws on every tick"""
    return SessionConfig(
        length=10,
        speed_divisor=1,
        chasers=[
            ChaserConfig(color=(200, 0, 0), offset=0.0, forward=True, amplitudes=[256])
        ],
        flares=FlareConfig(count=1, pause=1),
        seed=7,
    )


@pytest.fixture
def led_config():
    """Session configuration document for testing"""
    return {
        "led_chain": {"length": 12},
        "animation": {"mode": "flares", "speed_divisor": 2, "seed": 3},
        "chasers": [{"color": [10, 20, 30], "offset": 0.5, "forward": False}],
        "flares": {"count": 4, "pause": 2},
    }


@pytest.fixture
def config_file(tmp_path, led_config):
    """Create a temporary config file for testing"""
    config_path = tmp_path / "ledchain.yaml"
    with open(config_path, "w") as f:
        yaml.dump(led_config, f)
    return config_path
