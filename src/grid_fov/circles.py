"""Ray endpoint generators around an FOV origin.

Every generator shares the signature `generator(emit, startx, starty, radius, *extra)`
so `raycast()` can swap one for another.
"""
import math
import pytest
from typing import Optional, Set, Tuple
from grid_fov.helpers import EmitFn, check_radius, check_rotation


# E, NE, N, NW, W, SW, S, SE (y up)
ADJACENT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)


def adjacent(emit: EmitFn, startx: int, starty: int, radius: Optional[int] = None, *extra):
    """Emits the 8 tiles touching (startx, starty). `radius` and `extra` are ignored."""
    for dx, dy in ADJACENT_OFFSETS:
        emit(startx + dx, starty + dy)


def rotating_sweep(emit: EmitFn, startx: int, starty: int, radius: int, rotation: float):
    """Emits tiles on a circle of `radius` around (startx, starty).

    The sweep angle starts at 0 and advances by `abs(rotation)` radians while it is
    below 2π. Several angles can floor to the same tile; each tile is emitted once.
    """
    check_radius(radius, minimum=1)
    step = check_rotation(rotation)

    r = radius + 0.5
    seen: Set[Tuple[int, int]] = set()
    angle = 0.0

    while angle < math.tau:
        x = startx + math.floor(r * math.cos(angle))
        y = starty + math.floor(r * math.sin(angle))

        if (x, y) not in seen:
            seen.add((x, y))
            emit(x, y)

        angle += step


#   ########  ########   ######   ########
#      ##     ##        ##           ##
#      ##     ######     ######      ##
#      ##     ##              ##     ##
#      ##     ########  #######      ##


def test_adjacent():
    emitted = []
    adjacent(lambda x, y: emitted.append((x, y)), 10, -5)

    expected = {(10 + dx, -5 + dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)} - {(10, -5)}
    assert len(emitted) == 8
    assert set(emitted) == expected
    assert emitted[0] == (11, -5)


def test_adjacent_ignores_radius():
    a, b = [], []
    adjacent(lambda x, y: a.append((x, y)), 0, 0)
    adjacent(lambda x, y: b.append((x, y)), 0, 0, 40)
    c = []
    adjacent(lambda x, y: c.append((x, y)), 0, 0, 40, 0.1)
    assert a == c
    assert a == b


def test_rotating_sweep_quarter_turns():
    """Coarse increments floor to a handful of tiles, none repeated."""
    emitted = []
    rotating_sweep(lambda x, y: emitted.append((x, y)), 0, 0, 2, math.pi / 2)

    assert len(emitted) == len(set(emitted))
    assert emitted[0] == (2, 0)
    assert (0, 2) in emitted
    assert (-3, 0) in emitted or (-3, -1) in emitted


def test_rotating_sweep_dedup():
    """Fine increments revisit the same tiles many times; each is emitted once."""
    emitted = []
    rotating_sweep(lambda x, y: emitted.append((x, y)), 3, 4, 3, 0.01)

    assert len(emitted) == len(set(emitted))
    assert len(emitted) < int(math.tau / 0.01)
    for x, y in emitted:
        assert max(abs(x - 3), abs(y - 4)) <= 4


def test_rotating_sweep_negative_rotation():
    fwd, rev = [], []
    rotating_sweep(lambda x, y: fwd.append((x, y)), 0, 0, 5, 0.1)
    rotating_sweep(lambda x, y: rev.append((x, y)), 0, 0, 5, -0.1)
    assert fwd == rev


def test_rotating_sweep_bad_args():
    for radius, rotation in [(3, 0), (3, 0.0), (0, 0.1), (-2, 0.1)]:
        with pytest.raises(ValueError):
            rotating_sweep(lambda x, y: None, 0, 0, radius, rotation)
