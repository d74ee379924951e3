"""FOV calculation front door: pick a method and shape, get back a set of visible tiles.

Key Ideas:
- `FovSettings` holds radius, shape, and method; it is validated once on construction.
- SHADOWCAST uses `shadowcast()`.  RAYCAST and ADJACENT use `raycast()` with the
  `rotating_sweep` or `adjacent` circle generators.
- Rays stop at the first blocking tile, which is itself visible.
"""
import pytest
from enum import Enum
from typing import Optional, Set, Tuple
from grid_fov.circles import adjacent, rotating_sweep
from grid_fov.helpers import BlockedFn, RadiusShape, check_radius, check_rotation, radius_predicate
from grid_fov.raycast import raycast
from grid_fov.shadowcast import shadowcast


class FovMethod(Enum):
    """Visibility algorithm used by `fov_calc()`."""

    SHADOWCAST = 1
    RAYCAST = 2
    ADJACENT = 3

    @staticmethod
    def from_str(name: str):
        """Creates an instance from a configuration string."""
        match name.upper():
            case "SHADOWCAST":
                return FovMethod.SHADOWCAST
            case "RAYCAST":
                return FovMethod.RAYCAST
            case "ADJACENT":
                return FovMethod.ADJACENT
            case _:
                raise ValueError(f"Invalid FovMethod name `{name}`!")


class FovSettings:
    """Settings for FOV calculations.

    ### Parameters

    `radius`: int
        Maximum FOV radius. Zero means only the origin is visible.
    `shape`: RadiusShape
        Shape of the visible area within `radius`.
    `method`: FovMethod
        Visibility algorithm.
    `rotation`: float
        Angle step in radians for RAYCAST. Defaults to a step small enough to
        reach every tile on the circle's edge.
    """

    def __init__(
        self,
        radius: int,
        shape: RadiusShape = RadiusShape.EUCLIDEAN,
        method: FovMethod = FovMethod.SHADOWCAST,
        rotation: Optional[float] = None,
    ) -> None:
        # Enum lookups raise ValueError for anything that isn't a member or member value
        shape = RadiusShape.from_str(shape) if isinstance(shape, str) else RadiusShape(shape)
        method = FovMethod.from_str(method) if isinstance(method, str) else FovMethod(method)

        minimum = 1 if method == FovMethod.RAYCAST else 0
        self.radius = check_radius(radius, minimum)
        self.shape = shape
        self.method = method

        if rotation is None:
            rotation = 1.0 / (2 * (radius + 1))
        self.rotation = check_rotation(rotation)

    def __repr__(self) -> str:
        return f"FovSettings(radius={self.radius}, shape={self.shape.name}, method={self.method.name})"


def fov_calc(ox: int, oy: int, blocks_sight: BlockedFn, settings: FovSettings) -> Set[Tuple[int, int]]:
    """Returns visible tiles for the 2D FOV calculation.

    ### Parameters

    `ox`, `oy`: int
        Origin coordinates of the observer.
    `blocks_sight`: (x, y) -> bool
        `True` if the tile at (x, y) blocks sight.
    """
    within = radius_predicate(settings.shape, settings.radius)
    visible_tiles = {(ox, oy)}

    if settings.method == FovMethod.SHADOWCAST:

        def lit(x: int, y: int, dx: int, dy: int):
            visible_tiles.add((x, y))

        shadowcast(ox, oy, settings.radius, blocks_sight, lit, within)
        return visible_tiles

    def step(x: int, y: int) -> bool:
        if not within(x - ox, y - oy):
            return False
        visible_tiles.add((x, y))
        return (x, y) == (ox, oy) or not blocks_sight(x, y)

    match settings.method:
        case FovMethod.RAYCAST:
            raycast(rotating_sweep, step, ox, oy, settings.radius, settings.rotation)
        case FovMethod.ADJACENT:
            if settings.radius > 0:
                raycast(adjacent, step, ox, oy)
        case _:
            raise ValueError(f"Improper FovMethod `{settings.method}` provided!")

    return visible_tiles


#   ########  ########   ######   ########
#      ##     ##        ##           ##
#      ##     ######     ######      ##
#      ##     ##              ##     ##
#      ##     ########  #######      ##


def test_fov_method_str():
    suite = [
        ("shadowcast", FovMethod.SHADOWCAST),
        ("RayCast", FovMethod.RAYCAST),
        ("ADJACENT", FovMethod.ADJACENT),
    ]
    for name, expected in suite:
        assert FovMethod.from_str(name) == expected

    with pytest.raises(ValueError):
        FovMethod.from_str("permissive")


def test_settings():
    s = FovSettings(6, "chessboard", "raycast")
    assert s.shape == RadiusShape.CHESSBOARD
    assert s.method == FovMethod.RAYCAST
    assert 0 < s.rotation < 0.5

    s = FovSettings(0)
    assert s.method == FovMethod.SHADOWCAST
    assert s.shape == RadiusShape.EUCLIDEAN

    suite = [
        dict(radius=-1),
        dict(radius=0, method=FovMethod.RAYCAST),
        dict(radius=3.5),
        dict(radius=3, rotation=0.0),
        dict(radius=3, shape="triangle"),
        dict(radius=3, shape=None),
        dict(radius=3, shape=7),
        dict(radius=4, method=7),
        dict(radius=4, method=None),
    ]
    for kwargs in suite:
        with pytest.raises(ValueError):
            FovSettings(**kwargs)


def test_fov_calc_shadowcast():
    walls = {(1, 0)}
    visible = fov_calc(0, 0, lambda x, y: (x, y) in walls, FovSettings(5, RadiusShape.CHESSBOARD))

    assert (0, 0) in visible
    assert (1, 0) in visible
    assert (2, 0) not in visible
    assert (1, 1) in visible
    assert len(visible) < 11 * 11


def test_fov_calc_adjacent():
    settings = FovSettings(1, RadiusShape.CHESSBOARD, FovMethod.ADJACENT)
    visible = fov_calc(4, 4, lambda x, y: True, settings)
    assert visible == {(x, y) for x in range(3, 6) for y in range(3, 6)}

    visible = fov_calc(4, 4, lambda x, y: False, FovSettings(0, method=FovMethod.ADJACENT))
    assert visible == {(4, 4)}


def test_fov_calc_raycast_open():
    """Open grid raycasting reaches every tile of a small chessboard radius."""
    radius = 3
    settings = FovSettings(radius, RadiusShape.CHESSBOARD, FovMethod.RAYCAST, rotation=0.01)
    visible = fov_calc(0, 0, lambda x, y: False, settings)

    assert (0, 0) in visible
    for x, y in [(3, 0), (0, 3), (-3, 0), (0, -3), (2, 1), (-1, -2)]:
        assert (x, y) in visible
    assert all(max(abs(x), abs(y)) <= radius for x, y in visible)


def test_fov_calc_raycast_wall():
    walls = {(2, y) for y in range(-6, 7)}
    settings = FovSettings(5, RadiusShape.EUCLIDEAN, FovMethod.RAYCAST)
    visible = fov_calc(0, 0, lambda x, y: (x, y) in walls, settings)

    assert (2, 0) in visible
    assert not any(x > 2 for x, _ in visible)
    assert (-5, 0) in visible


def test_fov_calc_blocked_origin():
    """The observer's own tile never stops its rays."""
    settings = FovSettings(2, RadiusShape.CHESSBOARD, FovMethod.RAYCAST)
    visible = fov_calc(0, 0, lambda x, y: (x, y) == (0, 0), settings)
    assert (2, 1) in visible
    assert (-2, 0) in visible


def test_settings_enum_values():
    s = FovSettings(3, shape=2, method=3)
    assert s.shape == RadiusShape.CHESSBOARD
    assert s.method == FovMethod.ADJACENT


def test_fov_calc_unknown_method():
    """A method swapped in after construction is rejected, not run as another method."""
    settings = FovSettings(4, method=FovMethod.ADJACENT)
    settings.method = 7
    with pytest.raises(ValueError):
        fov_calc(0, 0, lambda x, y: False, settings)
