import sys
from pathlib import Path

import pytest

# Ensure the 'gridsight' source root is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "gridsight"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from sight.world.grid import GridBoard  # noqa: E402


@pytest.fixture
def board3() -> GridBoard:
    return GridBoard(3, 3)


@pytest.fixture
def board4x3() -> GridBoard:
    return GridBoard(4, 3)
