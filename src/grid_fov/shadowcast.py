"""2D FOV - Recursive Shadowcasting.

Key Ideas:
- FOV is divided into 8 parts called octants, each swept by the same canonical scan.
- A scan covers rows (distance from origin) 1 to `radius`.  Row `j` is scanned
  from `dx = -j` to `dx = 0` at `dy = -j`; the octant transform maps it onto the plane.
- Each tile spans a slope range `[lslope, rslope]` measured from tile corners. The
  ±0.5 offsets keep both denominators away from zero for every row >= 1.
- The visible wedge of a scan is `[light_end, light_start]`.  When a run of blocking
  tiles starts, the part of the wedge left of the run continues as a new scan one
  row farther out; the current scan resumes to the right of the run.
- New scans are pushed to a work list instead of recursing, so large radii can't
  exhaust the interpreter stack.  Blocking tiles are themselves visible.
"""
import pytest
import random
from enum import Enum
from typing import List, Set, Tuple
from grid_fov.helpers import (
    OCTANT_TRANSFORMS,
    BlockedFn,
    LitFn,
    RadiusFn,
    check_radius,
    chessboard_radius,
    euclidean_radius,
)


class ScanState(Enum):
    """State of a row scan."""

    SCANNING = 1
    BLOCKED = 2


# (row, light_start, light_end, (xx, xy, yx, yy))
Scan = Tuple[int, float, float, Tuple[int, int, int, int]]


def shadowcast(
    startx: int,
    starty: int,
    radius: int,
    blocked: BlockedFn,
    lit: LitFn,
    within_radius: RadiusFn,
):
    """Reports every tile visible from (startx, starty) to `lit`.

    Notes:
    - the origin is always visible and is reported first, exactly once.
    - tiles on octant boundaries (axes and diagonals) may be reported more than once.
    - `within_radius(dx, dy)` decides the shape of the visible area; it receives the
      canonical octant offsets, which share their magnitudes with the real ones.

    ### Parameters

    `startx`, `starty`: int
        Origin coordinates of the observer.
    `radius`: int
        Maximum number of rows scanned per octant. Zero lights only the origin.
    `blocked`: (x, y) -> bool
        `True` if the tile obstructs visibility beyond it.
    `lit`: (x, y, dx, dy) -> None
        Called for each visible tile with its real and canonical coordinates.
    """
    check_radius(radius)
    lit(startx, starty, 0, 0)

    for transform in OCTANT_TRANSFORMS:
        scans: List[Scan] = [(1, 1.0, 0.0, transform)]

        while scans:
            scans.extend(cast_light(startx, starty, radius, blocked, lit, within_radius, *scans.pop()))


def cast_light(
    startx: int,
    starty: int,
    radius: int,
    blocked: BlockedFn,
    lit: LitFn,
    within_radius: RadiusFn,
    row: int,
    light_start: float,
    light_end: float,
    transform: Tuple[int, int, int, int],
) -> List[Scan]:
    """Scans rows `row..radius` of one octant within the wedge `[light_end, light_start]`.

    Returns the scans spawned by each run of blocking tiles, to be run afterwards.
    """
    xx, xy, yx, yy = transform
    spawned: List[Scan] = []
    new_start = 0.0

    for j in range(row, radius + 1):
        state = ScanState.SCANNING
        dy = -j

        for dx in range(-j, 1):
            rslope = (dx + 0.5) / (dy - 0.5)
            lslope = (dx - 0.5) / (dy + 0.5)

            if light_start < rslope:
                continue
            if light_end > lslope:
                break

            curx = startx + dx * xx + dy * xy
            cury = starty + dx * yx + dy * yy

            if within_radius(dx, dy):
                lit(curx, cury, dx, dy)

            match state:
                case ScanState.SCANNING:
                    if j < radius and blocked(curx, cury):
                        state = ScanState.BLOCKED
                        if light_start >= lslope:
                            spawned.append((j + 1, light_start, lslope, transform))
                        new_start = rslope
                case ScanState.BLOCKED:
                    if blocked(curx, cury):
                        new_start = rslope
                    else:
                        state = ScanState.SCANNING
                        light_start = new_start

        # A trailing run of blockers closes the rest of the wedge
        if state == ScanState.BLOCKED:
            break

    return spawned


#   ########  ########   ######   ########
#      ##     ##        ##           ##
#      ##     ######     ######      ##
#      ##     ##              ##     ##
#      ##     ########  #######      ##


def visible_set(ox: int, oy: int, radius: int, walls: Set[Tuple[int, int]], within: RadiusFn):
    """Test helper: returns (ordered lit calls, set of lit tiles)."""
    calls = []
    shadowcast(
        ox,
        oy,
        radius,
        lambda x, y: (x, y) in walls,
        lambda x, y, dx, dy: calls.append((x, y, dx, dy)),
        within,
    )
    return calls, {(x, y) for x, y, _, _ in calls}


def test_origin_lit_first_and_once():
    suite = [
        (0, 0, 0, set()),
        (3, -2, 4, set()),
        (0, 0, 5, {(1, 0), (0, 1), (-1, 0), (0, -1), (1, 1), (-1, -1), (1, -1), (-1, 1)}),
    ]
    for ox, oy, radius, walls in suite:
        calls, _ = visible_set(ox, oy, radius, walls, euclidean_radius(radius))
        assert calls[0] == (ox, oy, 0, 0)
        assert sum(1 for c in calls if c[2:] == (0, 0)) == 1
        assert sum(1 for c in calls if c[:2] == (ox, oy)) == 1


def test_radius_zero():
    calls, tiles = visible_set(5, 5, 0, set(), euclidean_radius(0))
    assert calls == [(5, 5, 0, 0)]
    assert tiles == {(5, 5)}


def test_negative_radius():
    with pytest.raises(ValueError):
        shadowcast(0, 0, -1, lambda x, y: False, lambda x, y, dx, dy: None, lambda dx, dy: True)


def test_open_grid_radius_3():
    """Open grid, Euclidean radius 3 -> exactly the 29 tiles with dx² + dy² <= 9."""
    _, tiles = visible_set(0, 0, 3, set(), euclidean_radius(3))

    expected = {(x, y) for x in range(-3, 4) for y in range(-3, 4) if x * x + y * y <= 9}
    assert len(expected) == 29
    assert tiles == expected


def test_open_grid_symmetry():
    for radius in [1, 4, 7]:
        _, tiles = visible_set(0, 0, radius, set(), euclidean_radius(radius))

        assert tiles == {(-y, x) for x, y in tiles}
        assert tiles == {(-x, y) for x, y in tiles}
        assert tiles == {(x, -y) for x, y in tiles}


def test_origin_offset():
    _, at_zero = visible_set(0, 0, 4, {(2, 1), (-1, -3)}, chessboard_radius(4))
    _, moved = visible_set(10, -7, 4, {(12, -6), (9, -10)}, chessboard_radius(4))
    assert moved == {(x + 10, y - 7) for x, y in at_zero}


def test_shadow_behind_blocker():
    """Single blocker at (1, 0), radius 5, Chebyshev shape."""
    _, tiles = visible_set(0, 0, 5, {(1, 0)}, chessboard_radius(5))

    assert (1, 0) in tiles
    assert (2, 0) not in tiles
    assert (5, 0) not in tiles
    assert (1, 1) in tiles
    assert (1, -1) in tiles
    assert (0, 5) in tiles
    assert (-5, 0) in tiles
    assert (5, 5) in tiles


def test_shadow_along_every_axis():
    for wx, wy in [(2, 0), (0, 2), (-2, 0), (0, -2), (2, 2), (-2, -2)]:
        _, tiles = visible_set(0, 0, 6, {(wx, wy)}, chessboard_radius(6))
        assert (wx, wy) in tiles
        assert (wx * 2, wy * 2) not in tiles
        assert (wx * 3, wy * 3) not in tiles


def test_radius_cutoff():
    """No tile rejected by `within_radius` is ever reported."""
    within = euclidean_radius(5)
    calls, _ = visible_set(0, 0, 5, {(2, 1), (-1, 3)}, within)
    for _, _, dx, dy in calls:
        assert within(dx, dy)

    # Canonical offsets share magnitude with the real ones
    for x, y, dx, dy in calls:
        assert sorted([abs(x), abs(y)]) == sorted([abs(dx), abs(dy)])


def test_walled_room():
    """Tiles beyond a closed ring of walls are never visible; the walls are."""
    ring = {(x, y) for x in range(-3, 4) for y in range(-3, 4) if max(abs(x), abs(y)) == 3}
    _, tiles = visible_set(0, 0, 8, ring, chessboard_radius(8))

    assert ring <= tiles
    assert all(max(abs(x), abs(y)) <= 3 for x, y in tiles)


def test_alternating_blockers():
    """Blockers every other column along a row; no tile straight behind one is lit."""
    walls = {(x, 2) for x in range(-8, 9, 2)}
    _, tiles = visible_set(0, 0, 10, walls, chessboard_radius(10))

    assert {(-2, 2), (0, 2), (2, 2)} <= tiles
    assert {(-1, 2), (1, 2)} <= tiles
    assert (0, 3) not in tiles
    assert (0, 6) not in tiles
    assert (0, -10) in tiles


def recursive_reference(ox: int, oy: int, radius: int, walls: Set[Tuple[int, int]], within: RadiusFn):
    """Plain recursive shadowcasting, used to check the work list version."""
    tiles = {(ox, oy)}

    def cast(row, start, end, xx, xy, yx, yy):
        if start < end:
            return
        new_start = 0.0
        for j in range(row, radius + 1):
            dy = -j
            is_blocked = False
            for dx in range(-j, 1):
                rslope = (dx + 0.5) / (dy - 0.5)
                lslope = (dx - 0.5) / (dy + 0.5)
                if start < rslope:
                    continue
                if end > lslope:
                    break
                x, y = ox + dx * xx + dy * xy, oy + dx * yx + dy * yy
                if within(dx, dy):
                    tiles.add((x, y))
                if is_blocked:
                    if (x, y) in walls:
                        new_start = rslope
                    else:
                        is_blocked = False
                        start = new_start
                elif (x, y) in walls and j < radius:
                    is_blocked = True
                    cast(j + 1, start, lslope, xx, xy, yx, yy)
                    new_start = rslope
            if is_blocked:
                break

    for transform in OCTANT_TRANSFORMS:
        cast(1, 1.0, 0.0, *transform)

    return tiles


def test_matches_recursive_reference():
    rng = random.Random(1234)
    for pct in [0.05, 0.15, 0.3, 0.5]:
        for _ in range(5):
            radius = rng.randint(1, 12)
            walls = {
                (x, y)
                for x in range(-radius, radius + 1)
                for y in range(-radius, radius + 1)
                if (x, y) != (0, 0) and rng.random() < pct
            }
            within = euclidean_radius(radius)
            _, tiles = visible_set(0, 0, radius, walls, within)
            assert tiles == recursive_reference(0, 0, radius, walls, within)


def test_long_corridor():
    """Walls hugging both sides of a straight corridor leave its whole length visible."""
    length = 300
    calls = []

    def blocked(x: int, y: int) -> bool:
        return y != 0

    shadowcast(0, 0, length, blocked, lambda x, y, dx, dy: calls.append((x, y)), lambda dx, dy: True)

    tiles = set(calls)
    assert (length, 0) in tiles
    assert (-length, 0) in tiles
    assert (0, 1) in tiles
    assert (0, 2) not in tiles


#    ######   ########  ##    ##   ######
#   ##    ##  ##        ###  ###  ##    ##
#   ##    ##  ######    ## ## ##  ##    ##
#   ##    ##  ##        ##    ##  ##    ##
#   #######   ########  ##    ##   ######

if __name__ == "__main__":
    print("\n=====  2D Shadowcasting FOV  =====\n")

    radius = 9
    walls = {(3, 0), (3, 1), (-2, -2), (-3, -2), (0, 5), (1, 5), (-6, 3)}
    _, tiles = visible_set(0, 0, radius, walls, euclidean_radius(radius))

    for y in range(radius, -radius - 1, -1):
        row = []
        for x in range(-radius, radius + 1):
            if (x, y) == (0, 0):
                row.append("@")
            elif (x, y) in walls:
                row.append("#" if (x, y) in tiles else "x")
            else:
                row.append("." if (x, y) in tiles else " ")
        print(" ".join(row))

    print(f"\n{len(tiles)} visible tiles with radius {radius}")
