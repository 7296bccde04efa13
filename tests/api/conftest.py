# tests/api/conftest.py
import pytest
import sys
import os
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).parents[2]
sys.path.insert(0, str(project_root))

# Set test environment variables
os.environ["DEBUG"] = "true"
os.environ["API_KEY"] = "dev_key"


@pytest.fixture
def api_headers():
    """Fixture for API headers with authentication."""
    return {"X-API-Key": "dev_key"}


@pytest.fixture
def plan_payload():
    """Two ducts (one degenerate) crossing two walls (one without a level)."""
    return {
        "ducts": [
            {
                "id": "D1",
                "start": {"x": 0, "y": 0, "z": 1},
                "end": {"x": 10, "y": 0, "z": 1},
                "diameter": 0.3,
            },
            {
                "id": "D2",
                "start": {"x": 2, "y": 2, "z": 1},
                "end": {"x": 2, "y": 2, "z": 1},
                "diameter": 0.2,
            },
        ],
        "walls": [
            {
                "key": {"local": 101},
                "start": {"x": 4, "y": -5},
                "end": {"x": 4, "y": 5},
                "thickness": 0.2,
                "height": 3,
                "level_id": "L1",
            },
            {
                "key": {"local": 7, "container": 900},
                "start": {"x": 7, "y": -5},
                "end": {"x": 7, "y": 5},
                "thickness": 0.2,
                "height": 3,
            },
        ],
    }
