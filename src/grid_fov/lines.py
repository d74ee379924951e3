"""Line Drawing Algorithms (2D)"""
from typing import List, Tuple
from grid_fov.helpers import StepFn


def walk_line(x1: int, y1: int, x2: int, y2: int, step: StepFn) -> bool:
    """Breshenham's line algorithm - walks from (x1, y1) to (x2, y2) inclusive.

    `step(x, y)` is called for every tile on the line, in order. If it returns a
    falsy value the walk stops right there and `False` is returned. Returns `True`
    once the far endpoint has been passed to `step`.

    `tx`, `ty` are the doubled error terms for the secondary axis; integer only.
    """
    if not step(x1, y1):
        return False

    dx, dy = abs(x2 - x1), abs(y2 - y1)
    x_inc, y_inc = 1, 1
    x, y = x1, y1

    if x2 < x1:
        x_inc = -1
    if y2 < y1:
        y_inc = -1

    # Y-primary
    if dy > dx:
        tx = 2 * dx - dy

        for _ in range(dy):
            y += y_inc
            if tx >= 0:
                x += x_inc
                tx -= 2 * dy
            tx += 2 * dx

            if not step(x, y):
                return False

    # X-primary
    else:
        ty = 2 * dy - dx

        for _ in range(dx):
            x += x_inc
            if ty >= 0:
                y += y_inc
                ty -= 2 * dx
            ty += 2 * dy

            if not step(x, y):
                return False

    return True


def bresenham(x1: int, y1: int, x2: int, y2: int) -> List[Tuple[int, int]]:
    """Returns every tile on the line from (x1, y1) to (x2, y2) inclusive."""
    result = []

    def collect(x: int, y: int) -> bool:
        result.append((x, y))
        return True

    walk_line(x1, y1, x2, y2, collect)

    return result


#   ########  ########   ######   ########
#      ##     ##        ##           ##
#      ##     ######     ######      ##
#      ##     ##              ##     ##
#      ##     ########  #######      ##


def test_bresenham_2D():
    """Check expected values for the `bresenham()` 2D function."""
    suite = [
        (0, 0, 3, 0),
        (0, 0, 0, -3),
        (3, 0, 0, 0),
        (0, 0, 3, 3),
        (0, 0, -2, 2),
        (0, 0, 4, 2),
        (0, 0, 2, 4),
    ]
    expected = [
        [(0, 0), (1, 0), (2, 0), (3, 0)],
        [(0, 0), (0, -1), (0, -2), (0, -3)],
        [(3, 0), (2, 0), (1, 0), (0, 0)],
        [(0, 0), (1, 1), (2, 2), (3, 3)],
        [(0, 0), (-1, 1), (-2, 2)],
        [(0, 0), (1, 1), (2, 1), (3, 2), (4, 2)],
        [(0, 0), (1, 1), (1, 2), (2, 3), (2, 4)],
    ]
    actual = [bresenham(*coords) for coords in suite]
    for i, e in enumerate(expected):
        assert actual[i] == e


def test_walk_line_endpoints_and_length():
    """Uninterrupted walks visit both endpoints and max(|dx|, |dy|) + 1 tiles."""
    starts = [(0, 0), (-3, 2)]
    suite = [(x1, y1, x2, y2) for x1, y1 in starts for x2 in range(-5, 6) for y2 in range(-5, 6)]

    for x1, y1, x2, y2 in suite:
        visited = []
        done = walk_line(x1, y1, x2, y2, lambda x, y: visited.append((x, y)) or True)

        assert done
        assert visited[0] == (x1, y1)
        assert visited[-1] == (x2, y2)
        assert len(visited) == max(abs(x2 - x1), abs(y2 - y1)) + 1
        assert len(set(visited)) == len(visited)


def test_walk_line_single_tile():
    visited = []
    assert walk_line(7, -4, 7, -4, lambda x, y: visited.append((x, y)) or True)
    assert visited == [(7, -4)]


def test_walk_line_early_abort():
    """No tile after the one that returned `False` is visited."""
    visited = []

    def stop_at_wall(x: int, y: int) -> bool:
        visited.append((x, y))
        return (x, y) != (2, 1)

    assert not walk_line(0, 0, 4, 2, stop_at_wall)
    assert visited == [(0, 0), (1, 1), (2, 1)]

    visited.clear()
    assert not walk_line(0, 0, 5, 0, lambda x, y: visited.append((x, y)) or False)
    assert visited == [(0, 0)]
