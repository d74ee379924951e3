"""Raycasting: Bresenham lines from an origin to every tile a circle generator emits."""
from grid_fov.circles import adjacent, rotating_sweep
from grid_fov.helpers import CircleFn, StepFn
from grid_fov.lines import walk_line


def raycast(circle: CircleFn, line_callback: StepFn, startx: int, starty: int, *args):
    """Walks a line from (startx, starty) to every endpoint `circle` emits.

    `args` (radius and any extras) are passed through to `circle` unchanged.
    `line_callback(x, y)` is called for every tile of every ray; returning `False`
    stops the current ray only. Tiles shared by several rays are visited once per ray.
    """

    def cast(cx: int, cy: int):
        walk_line(startx, starty, cx, cy, line_callback)

    circle(cast, startx, starty, *args)


#   ########  ########   ######   ########
#      ##     ##        ##           ##
#      ##     ######     ######      ##
#      ##     ##              ##     ##
#      ##     ########  #######      ##


def test_raycast_adjacent():
    """Each of the 8 rays visits the origin then its neighbor."""
    visited = []
    raycast(adjacent, lambda x, y: visited.append((x, y)) or True, 2, 2)

    assert len(visited) == 16
    assert visited.count((2, 2)) == 8
    assert set(visited[1::2]) == {(2 + dx, 2 + dy) for dx, dy in [
        (1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1)
    ]}


def test_raycast_blocked_ray():
    """A blocking tile ends its own ray but not the others."""
    wall = (2, 0)
    visited = []

    def step(x: int, y: int) -> bool:
        visited.append((x, y))
        return (x, y) != wall

    raycast(rotating_sweep, step, 0, 0, 4, 0.05)

    assert wall in visited
    assert (3, 0) not in visited
    assert (4, 0) not in visited
    assert (0, 4) in visited
    assert (-4, 0) in visited or (-5, 0) in visited


def test_raycast_forwards_args():
    calls = []

    def circle(emit, sx, sy, radius, extra):
        calls.append((sx, sy, radius, extra))
        emit(sx + radius, sy)

    visited = []
    raycast(circle, lambda x, y: visited.append((x, y)) or True, 1, 1, 3, "extra")

    assert calls == [(1, 1, 3, "extra")]
    assert visited == [(1, 1), (2, 1), (3, 1), (4, 1)]


def test_raycast_generators_share_args():
    """Both circle generators accept the same (radius, rotation) arguments."""
    for circle in (rotating_sweep, adjacent):
        visited = []
        raycast(circle, lambda x, y: visited.append((x, y)) or True, 0, 0, 3, 0.1)

        assert (0, 0) in visited
        assert (1, 0) in visited
        assert all(max(abs(x), abs(y)) <= 4 for x, y in visited)
