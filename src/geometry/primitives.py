# geometry/primitives.py
"""
Closed-form ray intersection for the canonical unit primitives, in object space.

Every solver takes the ray start (ox, oy, oz) and direction (dx, dy, dz) and
returns a flat tuple (t, px, py, pz, nx, ny, nz, u, v, incoming). A miss is
reported with t = -1.0. The normal is unit length and points outward;
incoming is False when the ray starts inside the solid and only the exit
root is ahead of it.

- box:      [-0.5, 0.5]^3
- sphere:   radius 0.5 centered at the origin
- cylinder: radius 0.5, y in [0, height]
- cone:     base radius 0.5 at y = 0, apex at y = height
"""
import math
from typing import Optional, Tuple
import numpy as np
from numba import njit

PRIMITIVES = ("box", "sphere", "cylinder", "cone")
UNIT_HEIGHT = 1.0
# Texture cell size of the unwrapped box cross
BOX_CELL = 0.25

@njit(cache=True)
def _miss():
    return -1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, False

@njit(cache=True)
def _slab(o, d, lo, hi):
    """Parametric interval of the ray inside lo <= o + t*d <= hi."""
    if d == 0.0:
        if o < lo or o > hi:
            return False, 0.0, 0.0
        return True, -np.inf, np.inf
    t0 = (lo - o) / d
    t1 = (hi - o) / d
    if t0 > t1:
        t0, t1 = t1, t0
    return True, t0, t1

@njit(cache=True)
def _azimuth(x, z):
    theta = math.atan2(-z, x)
    return (theta + math.pi) / (2.0 * math.pi)

@njit(cache=True)
def _box_uv(px, py, pz, nx, ny, nz):
    # cross layout: row 1 holds -x, +z, +x, -z; +y sits above +z and -y below it
    if nz > 0.5:
        col, row, s, t = 1.0, 1.0, px + 0.5, py + 0.5
    elif nz < -0.5:
        col, row, s, t = 3.0, 1.0, 0.5 - px, py + 0.5
    elif nx > 0.5:
        col, row, s, t = 2.0, 1.0, 0.5 - pz, py + 0.5
    elif nx < -0.5:
        col, row, s, t = 0.0, 1.0, pz + 0.5, py + 0.5
    elif ny > 0.5:
        col, row, s, t = 1.0, 2.0, px + 0.5, 0.5 - pz
    else:
        col, row, s, t = 1.0, 0.0, px + 0.5, pz + 0.5
    return (col + s) * BOX_CELL, (row + t) * BOX_CELL

@njit(cache=True)
def intersect_box(ox, oy, oz, dx, dy, dz):
    ok, tx0, tx1 = _slab(ox, dx, -0.5, 0.5)
    if not ok:
        return _miss()
    ok, ty0, ty1 = _slab(oy, dy, -0.5, 0.5)
    if not ok:
        return _miss()
    ok, tz0, tz1 = _slab(oz, dz, -0.5, 0.5)
    if not ok:
        return _miss()

    t1 = max(tx0, ty0, tz0)
    t2 = min(tx1, ty1, tz1)
    if t1 > t2 or t2 < 0.0:
        return _miss()
    incoming = t1 >= 0.0
    t = t1 if incoming else t2

    px = ox + t * dx
    py = oy + t * dy
    pz = oz + t * dz

    tol = 1e-6
    nx, ny, nz = 0.0, 0.0, 0.0
    if abs(px - 0.5) < tol:
        nx = 1.0
    elif abs(px + 0.5) < tol:
        nx = -1.0
    elif abs(py - 0.5) < tol:
        ny = 1.0
    elif abs(py + 0.5) < tol:
        ny = -1.0
    elif abs(pz - 0.5) < tol:
        nz = 1.0
    elif abs(pz + 0.5) < tol:
        nz = -1.0
    else:
        # round-off on large t: pick the dominant axis
        ax, ay, az = abs(px), abs(py), abs(pz)
        if ax >= ay and ax >= az:
            nx = 1.0 if px > 0.0 else -1.0
        elif ay >= az:
            ny = 1.0 if py > 0.0 else -1.0
        else:
            nz = 1.0 if pz > 0.0 else -1.0

    u, v = _box_uv(px, py, pz, nx, ny, nz)
    return t, px, py, pz, nx, ny, nz, u, v, incoming

@njit(cache=True)
def intersect_sphere(ox, oy, oz, dx, dy, dz):
    a = dx * dx + dy * dy + dz * dz
    b = 2.0 * (ox * dx + oy * dy + oz * dz)
    c = ox * ox + oy * oy + oz * oz - 0.25
    if a == 0.0:
        return _miss()
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return _miss()

    sqrt_disc = math.sqrt(discriminant)
    t1 = (-b - sqrt_disc) / (2.0 * a)
    t2 = (-b + sqrt_disc) / (2.0 * a)
    if t2 < 0.0:
        return _miss()
    incoming = t1 >= 0.0
    t = t1 if incoming else t2

    px = ox + t * dx
    py = oy + t * dy
    pz = oz + t * dz
    # |p| = 0.5 on the surface
    nx, ny, nz = 2.0 * px, 2.0 * py, 2.0 * pz

    phi = math.asin(min(1.0, max(-1.0, ny)))
    u = _azimuth(nx, nz)
    v = (phi + 0.5 * math.pi) / math.pi
    return t, px, py, pz, nx, ny, nz, u, v, incoming

@njit(cache=True)
def intersect_cylinder(ox, oy, oz, dx, dy, dz, height):
    # lateral surface x^2 + z^2 = 0.25, unbounded in y
    a = dx * dx + dz * dz
    b = 2.0 * (ox * dx + oz * dz)
    c = ox * ox + oz * oz - 0.25
    if a == 0.0:
        if c > 0.0:
            return _miss()
        side0, side1 = -np.inf, np.inf
    else:
        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return _miss()
        sqrt_disc = math.sqrt(discriminant)
        side0 = (-b - sqrt_disc) / (2.0 * a)
        side1 = (-b + sqrt_disc) / (2.0 * a)

    ok, cap0, cap1 = _slab(oy, dy, 0.0, height)
    if not ok:
        return _miss()

    t1 = max(side0, cap0)
    t2 = min(side1, cap1)
    if t1 > t2 or t2 < 0.0:
        return _miss()
    incoming = t1 >= 0.0
    t = t1 if incoming else t2
    on_cap = cap0 >= side0 if incoming else cap1 <= side1

    px = ox + t * dx
    py = oy + t * dy
    pz = oz + t * dz
    if on_cap:
        nx, nz = 0.0, 0.0
        ny = 1.0 if py > 0.5 * height else -1.0
    else:
        nx, ny, nz = 2.0 * px, 0.0, 2.0 * pz

    u = _azimuth(px, pz)
    v = py / height
    return t, px, py, pz, nx, ny, nz, u, v, incoming

@njit(cache=True)
def _cone_interior(ox, oy, oz, dx, dy, dz, height):
    """
    Intervals of the ray inside the double cone x^2 + z^2 <= k^2 (height - y)^2,
    as (count, lo0, hi0, lo1, hi1). count is 0, 1 or 2.
    """
    k = 0.5 / height
    k2 = k * k
    h = height - oy
    a = dx * dx + dz * dz - k2 * dy * dy
    b = 2.0 * (ox * dx + oz * dz + k2 * h * dy)
    c = ox * ox + oz * oz - k2 * h * h

    if abs(a) < 1e-12:
        # ray parallel to a generator: f(t) = b t + c
        if b == 0.0:
            if c <= 0.0:
                return 1, -np.inf, np.inf, 0.0, 0.0
            return 0, 0.0, 0.0, 0.0, 0.0
        root = -c / b
        if b > 0.0:
            return 1, -np.inf, root, 0.0, 0.0
        return 1, root, np.inf, 0.0, 0.0

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        if a > 0.0:
            return 0, 0.0, 0.0, 0.0, 0.0
        return 1, -np.inf, np.inf, 0.0, 0.0

    sqrt_disc = math.sqrt(discriminant)
    r0 = (-b - sqrt_disc) / (2.0 * a)
    r1 = (-b + sqrt_disc) / (2.0 * a)
    if r0 > r1:
        r0, r1 = r1, r0
    if a > 0.0:
        return 1, r0, r1, 0.0, 0.0
    # steeper than the cone wall: the ray passes through both nappes
    return 2, -np.inf, r0, r1, np.inf

@njit(cache=True)
def intersect_cone(ox, oy, oz, dx, dy, dz, height):
    count, lo0, hi0, lo1, hi1 = _cone_interior(ox, oy, oz, dx, dy, dz, height)
    if count == 0:
        return _miss()
    ok, cap0, cap1 = _slab(oy, dy, 0.0, height)
    if not ok:
        return _miss()

    # Inside the slab only the real nappe exists and it is convex, so at most
    # one interval survives the clip; the other can only touch the apex.
    t1 = max(lo0, cap0)
    t2 = min(hi0, cap1)
    side0 = lo0
    side1 = hi0
    if count == 2:
        s1 = max(lo1, cap0)
        s2 = min(hi1, cap1)
        if t1 > t2 or (s1 <= s2 and s2 - s1 > t2 - t1):
            t1, t2 = s1, s2
            side0, side1 = lo1, hi1

    if t1 > t2 or t2 < 0.0:
        return _miss()
    incoming = t1 >= 0.0
    t = t1 if incoming else t2
    on_cap = cap0 >= side0 if incoming else cap1 <= side1

    px = ox + t * dx
    py = oy + t * dy
    pz = oz + t * dz
    if on_cap:
        nx, nz = 0.0, 0.0
        ny = 1.0 if py > 0.5 * height else -1.0
    else:
        k = 0.5 / height
        nx, ny, nz = px, k * k * (height - py), pz
        length = math.sqrt(nx * nx + ny * ny + nz * nz)
        if length == 0.0:
            # apex
            nx, ny, nz = 0.0, 1.0, 0.0
        else:
            nx, ny, nz = nx / length, ny / length, nz / length

    u = _azimuth(px, pz)
    v = py / height
    return t, px, py, pz, nx, ny, nz, u, v, incoming

def solve(primitive: str, start: np.ndarray, direction: np.ndarray) -> Optional[Tuple]:
    """
    Dispatches to the solver for the named primitive. Returns the raw hit tuple,
    or None on a miss or for an unknown primitive name.
    """
    ox, oy, oz = float(start[0]), float(start[1]), float(start[2])
    dx, dy, dz = float(direction[0]), float(direction[1]), float(direction[2])
    if primitive == "box":
        hit = intersect_box(ox, oy, oz, dx, dy, dz)
    elif primitive == "sphere":
        hit = intersect_sphere(ox, oy, oz, dx, dy, dz)
    elif primitive == "cylinder":
        hit = intersect_cylinder(ox, oy, oz, dx, dy, dz, UNIT_HEIGHT)
    elif primitive == "cone":
        hit = intersect_cone(ox, oy, oz, dx, dy, dz, UNIT_HEIGHT)
    else:
        return None
    if hit[0] < 0.0:
        return None
    return hit
