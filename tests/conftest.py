# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "apps", "solver" and "types_sudoku" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

PUZZLES = ROOT / "puzzles"

# Wikipedia's example puzzle and its unique solution
WIKI_PUZZLE = [
    "53xx7xxxx",
    "6xx195xxx",
    "x98xxxx6x",
    "8xxx6xxx3",
    "4xx8x3xx1",
    "7xxx2xxx6",
    "x6xxxx28x",
    "xxx419xx5",
    "xxxx8xx79",
]
WIKI_SOLUTION = [
    "534678912",
    "672195348",
    "198342567",
    "859761423",
    "426853791",
    "713924856",
    "961537284",
    "287419635",
    "345286179",
]
LATIN_4X4 = ["1234", "3412", "2143", "4321"]


@pytest.fixture
def wiki_puzzle():
    return list(WIKI_PUZZLE)


@pytest.fixture
def wiki_solution():
    return list(WIKI_SOLUTION)


@pytest.fixture
def latin_4x4():
    return list(LATIN_4X4)


@pytest.fixture
def puzzles_dir():
    return PUZZLES
