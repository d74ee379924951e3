"""Field of view on an unbounded integer grid, driven entirely by callbacks."""
from grid_fov.circles import ADJACENT_OFFSETS, adjacent, rotating_sweep
from grid_fov.fov import FovMethod, FovSettings, fov_calc
from grid_fov.helpers import (
    OCTANT_TRANSFORMS,
    Coords,
    Octant,
    RadiusShape,
    chessboard_radius,
    euclidean_radius,
    orthogonal_radius,
    radius_predicate,
)
from grid_fov.lines import bresenham, walk_line
from grid_fov.raycast import raycast
from grid_fov.shadowcast import shadowcast

__all__ = [
    "ADJACENT_OFFSETS",
    "OCTANT_TRANSFORMS",
    "Coords",
    "FovMethod",
    "FovSettings",
    "Octant",
    "RadiusShape",
    "adjacent",
    "bresenham",
    "chessboard_radius",
    "euclidean_radius",
    "fov_calc",
    "orthogonal_radius",
    "radius_predicate",
    "raycast",
    "rotating_sweep",
    "shadowcast",
    "walk_line",
]
