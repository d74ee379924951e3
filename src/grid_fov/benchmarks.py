"""FOV calculation benchmarks.

Key Ideas:
- Randomly generate a set of X*Y blocked tiles around the map center.
- Each bench runs 10 `fov_calc()`s per `maps` value.  If 10 maps, 100 FOV calcs are done.
- Blocking lookups are plain set membership, so timings reflect the FOV methods only.

Run with `python -m grid_fov.benchmarks`.
"""
import random
import time
from typing import Callable, List, Set, Tuple
from grid_fov.fov import FovMethod, FovSettings, fov_calc
from grid_fov.helpers import Coords, RadiusShape

#    ######   ########  ########  ##    ##  #######
#   ##        ##           ##     ##    ##  ##    ##
#    ######   ######       ##     ##    ##  #######
#         ##  ##           ##     ##    ##  ##
#   #######   ########     ##      ######   ##


class BenchSettings:
    def __init__(
        self, seed: int, dims: Coords, maps: int, radius: int, pct_blocked: float
    ) -> None:
        if dims.x < 1 or dims.y < 1:
            raise ValueError("all map dimensions must be > 0!")
        if not 0.0 <= pct_blocked <= 1.0:
            raise ValueError("pct_blocked must be within [0.0, 1.0]!")

        self.seed = seed
        self.dims = dims
        self.maps = maps
        self.radius = radius
        self.pct_blocked = pct_blocked
        self.blocked_ct = int(dims.x * dims.y * pct_blocked)


def random_blockers(dims: Coords, count: int) -> Set[Tuple[int, int]]:
    """Generates a random set of up to `count` blocked tiles."""
    x, y = dims.x - 1, dims.y - 1

    return {(random.randint(0, x), random.randint(0, y)) for _ in range(count)}


def bench_timer(settings: FovSettings, bs: BenchSettings) -> Tuple[float, int]:
    """General-use benchmark timer. Returns total seconds and visible tile count."""
    sx, sy = bs.dims.x // 2, bs.dims.y // 2
    random.seed(bs.seed)
    total = 0.0

    # Time each variation of the map
    origins = [(sx + dx, sy) for dx in range(-4, 6)]
    visible_ct = 0

    for _ in range(bs.maps):
        blocked = random_blockers(bs.dims, bs.blocked_ct)
        blocked.difference_update(origins)

        def blocks_sight(x: int, y: int) -> bool:
            return (x, y) in blocked

        start = time.perf_counter()
        for ox, oy in origins:
            visible_ct += len(fov_calc(ox, oy, blocks_sight, settings))
        total += time.perf_counter() - start

    return total, visible_ct


def bench_shadowcast(bs: BenchSettings) -> Tuple[float, int]:
    """Bench for recursive shadowcasting."""
    settings = FovSettings(bs.radius, RadiusShape.EUCLIDEAN, FovMethod.SHADOWCAST)
    return bench_timer(settings, bs)


def bench_raycast(bs: BenchSettings) -> Tuple[float, int]:
    """Bench for raycasting with the default rotation step."""
    settings = FovSettings(bs.radius, RadiusShape.EUCLIDEAN, FovMethod.RAYCAST)
    return bench_timer(settings, bs)


def bench_raycast_coarse(bs: BenchSettings) -> Tuple[float, int]:
    """Bench for raycasting with a coarse rotation step (misses edge tiles)."""
    settings = FovSettings(bs.radius, RadiusShape.EUCLIDEAN, FovMethod.RAYCAST, rotation=0.1)
    return bench_timer(settings, bs)


def run_benchmark(
    name: str, funcs: List[Tuple[str, Callable]], settings: BenchSettings
):
    """Summarizes collection of benchmarks in (bench_name, bench_func) format.

    Notes:
    - there are 10 origins explored per map in `maps`
    - results are printed in the order given
    """
    s = settings
    print(f"--- {name} benchmarks ---")
    print(
        f"Dims = {s.dims.x}x{s.dims.y}, density = {s.pct_blocked}, maps = {s.maps}, radius = {s.radius}"
    )

    frames = settings.maps * 10
    results = []

    for func_name, func in funcs:
        print(f"Benchmarking {func_name}...")
        total_time, visible_ct = func(settings)
        fps = int(frames / total_time) if total_time > 0 else 0
        results.append((func_name, total_time, fps, visible_ct))

    print("...Done!  The results:\n")

    for bench_name, total_time, fps, visible_ct in results:
        print(f"{bench_name:20} {round(total_time, 3):6} seconds {fps:5} FPS {visible_ct:8} visible")


#   ########  ########   ######   ########
#      ##     ##        ##           ##
#      ##     ######     ######      ##
#      ##     ##              ##     ##
#      ##     ########  #######      ##


def test_random_blockers():
    random.seed(7)
    dims = Coords(10, 6)
    blocked = random_blockers(dims, 20)

    assert 0 < len(blocked) <= 20
    assert all(0 <= x < 10 and 0 <= y < 6 for x, y in blocked)


def test_bench_timer_small():
    bs = BenchSettings(3, Coords(24, 24), 2, 5, 0.1)
    total, visible_ct = bench_shadowcast(bs)

    assert total >= 0.0
    assert visible_ct >= 2 * 10


#   ##    ##     ##     ########  ##    ##
#   ###  ###   ##  ##      ##     ####  ##
#   ## ## ##  ##    ##     ##     ## ## ##
#   ##    ##  ########     ##     ##  ####
#   ##    ##  ##    ##  ########  ##    ##

if __name__ == "__main__":
    print("\n===== FOV Benchmarks =====\n")

    seed = 13
    dims = Coords(128, 128)
    maps = 20
    radius = 31
    density = 0.10

    bench_settings = BenchSettings(seed, dims, maps, radius, density)

    run_benchmark(
        f"Density {int(density * 100)}% Radius {radius}",
        [
            ("Shadowcast", bench_shadowcast),
            ("Raycast", bench_raycast),
            ("Raycast (coarse)", bench_raycast_coarse),
        ],
        bench_settings,
    )
