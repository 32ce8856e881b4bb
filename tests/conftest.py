"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import pytest

from pathstep.core.grid import INVALID, GridMap, Point, Valid

# X = blocked, . = cost-1 cell
BASIC_LAYOUT = [
    "XXXXXXX",
    "X.XXX.X",
    "X.XXX.X",
    "X.X...X",
    "X.X.XXX",
    "X......",
    "XXXXXXX",
]


def grid_from_layout(layout, cost=1) -> GridMap:
    cells = [[INVALID if ch == "X" else Valid(cost) for ch in line] for line in layout]
    return GridMap(len(layout), len(layout[0]), cells)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def maps_dir(project_root: Path) -> Path:
    return project_root / "maps"


@pytest.fixture
def basic_map() -> GridMap:
    """7x7 corridor map; the only route from (1,1) to (1,5) costs 12."""
    return grid_from_layout(BASIC_LAYOUT)


@pytest.fixture
def basic_route() -> list:
    return [
        Point(1, 1), Point(2, 1), Point(3, 1), Point(4, 1), Point(5, 1),
        Point(5, 2), Point(5, 3), Point(4, 3), Point(3, 3), Point(3, 4),
        Point(3, 5), Point(2, 5), Point(1, 5),
    ]


@pytest.fixture
def open_map() -> GridMap:
    return GridMap.filled(4, 4)
