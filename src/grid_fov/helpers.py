"""Helper types, enums, and radius predicates for grid FOV calculations."""
import math
import pytest
from enum import Enum
from typing import Callable, Tuple


# Callback signatures. Points are always passed as two ints, never as objects.
StepFn = Callable[[int, int], bool]
EmitFn = Callable[[int, int], None]
BlockedFn = Callable[[int, int], bool]
LitFn = Callable[[int, int, int, int], None]
RadiusFn = Callable[[int, int], bool]
CircleFn = Callable[..., None]


class Coords:
    """2D grid integer coordinates."""

    __slots__ = "x", "y"

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def __iter__(self):
        return iter((self.x, self.y))

    def __repr__(self) -> str:
        return f"{self.x, self.y}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Coords):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def as_tuple(self):
        return (self.x, self.y)


class Octant(Enum):
    """Octant for use in FOV calcs. Octant 1 is ENE.  Count CCW.

    The value is the index of the octant's entry in `OCTANT_TRANSFORMS`.
    """

    O1 = 0
    O2 = 1
    O3 = 2
    O4 = 3
    O5 = 4
    O6 = 5
    O7 = 6
    O8 = 7

    def transform(self) -> Tuple[int, int, int, int]:
        """Returns the `(xx, xy, yx, yy)` multipliers for this Octant."""
        return OCTANT_TRANSFORMS[self.value]


# Multipliers `(xx, xy, yx, yy)` mapping a canonical sweep cell `(dx, dy)`, where
# `dy = -row` and `-row <= dx <= 0`, onto a real offset:
#   x = dx * xx + dy * xy
#   y = dx * yx + dy * yy
# Listed in `Octant` order (ENE first, counting CCW with y up).
OCTANT_TRANSFORMS: Tuple[Tuple[int, int, int, int], ...] = (
    (0, -1, -1, 0),
    (-1, 0, 0, -1),
    (1, 0, 0, -1),
    (0, 1, -1, 0),
    (0, 1, 1, 0),
    (1, 0, 0, 1),
    (-1, 0, 0, 1),
    (0, -1, 1, 0),
)


class RadiusShape(Enum):
    """Shape of the visible area around the FOV origin."""

    EUCLIDEAN = 1  # Circle
    CHESSBOARD = 2  # Square (king's move)
    ORTHOGONAL = 3  # Diamond (NSEW moves)

    @staticmethod
    def from_str(name: str):
        """Creates an instance from a configuration string."""
        match name.upper():
            case "EUCLIDEAN" | "CIRCLE":
                return RadiusShape.EUCLIDEAN
            case "CHESSBOARD" | "SQUARE":
                return RadiusShape.CHESSBOARD
            case "ORTHOGONAL" | "DIAMOND":
                return RadiusShape.ORTHOGONAL
            case _:
                raise ValueError(f"Invalid RadiusShape name `{name}`!")


#   ########  ##    ##  ##    ##   ######   ########  ########   ######   ##    ##
#   ##        ##    ##  ####  ##  ##    ##     ##        ##     ##    ##  ####  ##
#   ######    ##    ##  ## ## ##  ##           ##        ##     ##    ##  ## ## ##
#   ##        ##    ##  ##  ####  ##    ##     ##        ##     ##    ##  ##  ####
#   ##         ######   ##    ##   ######      ##     ########   ######   ##    ##


def check_radius(radius: int, minimum: int = 0) -> int:
    """Returns `radius` if it is an integer of at least `minimum`."""
    if isinstance(radius, bool) or not isinstance(radius, int):
        raise ValueError(f"radius must be an integer, got {radius!r}!")
    if radius < minimum:
        raise ValueError(f"radius must be >= {minimum}, got {radius}!")

    return radius


def check_rotation(rotation: float) -> float:
    """Returns absolute rotation increment in radians.

    A zero increment would never advance the sweep angle past 2π.
    """
    step = abs(float(rotation))
    if step == 0.0 or not math.isfinite(step):
        raise ValueError(f"rotation must be non-zero and finite, got {rotation!r}!")

    return step


def euclidean_radius(radius: int) -> RadiusFn:
    """Returns predicate for cells within a circle: `dx² + dy² <= radius²`."""
    limit = radius * radius

    def within(dx: int, dy: int) -> bool:
        return dx * dx + dy * dy <= limit

    return within


def chessboard_radius(radius: int) -> RadiusFn:
    """Returns predicate for cells within a square: `max(|dx|, |dy|) <= radius`."""

    def within(dx: int, dy: int) -> bool:
        return max(abs(dx), abs(dy)) <= radius

    return within


def orthogonal_radius(radius: int) -> RadiusFn:
    """Returns predicate for cells within a diamond: `|dx| + |dy| <= radius`."""

    def within(dx: int, dy: int) -> bool:
        return abs(dx) + abs(dy) <= radius

    return within


def radius_predicate(shape: RadiusShape, radius: int) -> RadiusFn:
    """Returns the `within_radius` predicate for a given RadiusShape."""
    match shape:
        case RadiusShape.EUCLIDEAN:
            return euclidean_radius(radius)
        case RadiusShape.CHESSBOARD:
            return chessboard_radius(radius)
        case RadiusShape.ORTHOGONAL:
            return orthogonal_radius(radius)

    raise ValueError(f"Improper RadiusShape `{shape}` provided!")


#   ########  ########   ######   ########
#      ##     ##        ##           ##
#      ##     ######     ######      ##
#      ##     ##              ##     ##
#      ##     ########  #######      ##


def test_octant_transforms_cover_plane():
    """Every offset within radius 4 is reached by at least one Octant."""
    radius = 4
    reached = {(0, 0)}
    for octant in Octant:
        xx, xy, yx, yy = octant.transform()
        for row in range(1, radius + 1):
            dy = -row
            for dx in range(-row, 1):
                reached.add((dx * xx + dy * xy, dx * yx + dy * yy))

    expected = {
        (x, y) for x in range(-radius, radius + 1) for y in range(-radius, radius + 1)
    }
    assert reached == expected


def test_octant_directions():
    # Column dx = 0 of row 1 lies on an axis
    suite = [
        (Octant.O1, (1, 0)),
        (Octant.O2, (0, 1)),
        (Octant.O3, (0, 1)),
        (Octant.O4, (-1, 0)),
        (Octant.O5, (-1, 0)),
        (Octant.O6, (0, -1)),
        (Octant.O7, (0, -1)),
        (Octant.O8, (1, 0)),
    ]
    for octant, expected in suite:
        xx, xy, yx, yy = octant.transform()
        dx, dy = 0, -1
        assert (dx * xx + dy * xy, dx * yx + dy * yy) == expected

    assert len(set(OCTANT_TRANSFORMS)) == 8


def test_radius_shape_str():
    suite = [
        ("euclidean", RadiusShape.EUCLIDEAN),
        ("Circle", RadiusShape.EUCLIDEAN),
        ("CHESSBOARD", RadiusShape.CHESSBOARD),
        ("square", RadiusShape.CHESSBOARD),
        ("orthogonal", RadiusShape.ORTHOGONAL),
        ("diamond", RadiusShape.ORTHOGONAL),
    ]
    for name, expected in suite:
        assert RadiusShape.from_str(name) == expected

    with pytest.raises(ValueError):
        RadiusShape.from_str("hexagon")


def test_radius_predicates():
    suite = [
        (RadiusShape.EUCLIDEAN, (3, 0), True),
        (RadiusShape.EUCLIDEAN, (2, 2), True),
        (RadiusShape.EUCLIDEAN, (3, 1), False),
        (RadiusShape.CHESSBOARD, (3, -3), True),
        (RadiusShape.CHESSBOARD, (-4, 0), False),
        (RadiusShape.ORTHOGONAL, (2, -1), True),
        (RadiusShape.ORTHOGONAL, (2, 2), False),
    ]
    for shape, (dx, dy), expected in suite:
        assert radius_predicate(shape, 3)(dx, dy) == expected


def test_check_radius():
    assert check_radius(0) == 0
    assert check_radius(5, minimum=1) == 5

    for bad, minimum in [(-1, 0), (0, 1), (2.5, 0), (True, 0), ("3", 0)]:
        with pytest.raises(ValueError):
            check_radius(bad, minimum)


def test_check_rotation():
    assert check_rotation(0.5) == 0.5
    assert check_rotation(-0.25) == 0.25

    for bad in [0, 0.0, -0.0, math.inf, math.nan]:
        with pytest.raises(ValueError):
            check_rotation(bad)


def test_coords():
    c = Coords(3, -2)
    x, y = c
    assert (x, y) == (3, -2)
    assert c.as_tuple() == (3, -2)
    assert c == Coords(3, -2)
    assert len({c, Coords(3, -2)}) == 1
    assert repr(c) == "(3, -2)"
