"""Noise sampling over arbitrary 2D point sets.

Provides vectorized gradient (Perlin) noise, fBm with optional domain
warping, and the smoothstep helper used by the falloff. All functions are
pure: the same seed, points and config always give the same values.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .config import NoiseConfig

# Gradient directions for 2D Perlin noise
_GRADIENTS = np.array(
    [[1, 1], [-1, 1], [1, -1], [-1, -1], [1, 0], [-1, 0], [0, 1], [0, -1]],
    dtype=np.float64,
)

# Octave offsets are drawn from this range so octaves don't share lattice cells
_OCTAVE_OFFSET_RANGE = 10000.0


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _grad(
    hashes: NDArray[np.int64],
    dx: NDArray[np.float64],
    dz: NDArray[np.float64],
) -> NDArray[np.float64]:
    g = _GRADIENTS[hashes & 7]
    return g[:, 0] * dx + g[:, 1] * dz


def permutation_table(rng: np.random.Generator) -> NDArray[np.int64]:
    """Shuffled 0..255 table, doubled to avoid index wrapping."""
    perm = rng.permutation(256).astype(np.int64)
    return np.concatenate([perm, perm])


def perlin_2d(
    perm: NDArray[np.int64],
    x: NDArray[np.float64],
    z: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Single octave of 2D Perlin noise at (x, z).

    Args:
        perm: Doubled permutation table from permutation_table().
        x: Sample x coordinates (1D).
        z: Sample z coordinates (1D).

    Returns:
        Noise values, roughly in [-1, 1].
    """
    x0 = np.floor(x)
    z0 = np.floor(z)
    xf = x - x0
    zf = z - z0
    xi = x0.astype(np.int64) & 255
    zi = z0.astype(np.int64) & 255

    u = _fade(xf)
    v = _fade(zf)

    h00 = perm[perm[xi] + zi]
    h01 = perm[perm[xi] + zi + 1]
    h10 = perm[perm[xi + 1] + zi]
    h11 = perm[perm[xi + 1] + zi + 1]

    g00 = _grad(h00, xf, zf)
    g10 = _grad(h10, xf - 1.0, zf)
    g01 = _grad(h01, xf, zf - 1.0)
    g11 = _grad(h11, xf - 1.0, zf - 1.0)

    x1 = g00 + u * (g10 - g00)
    x2 = g01 + u * (g11 - g01)
    return x1 + v * (x2 - x1)


def evaluate_noise(
    points: ArrayLike,
    seed: int,
    config: NoiseConfig,
) -> NDArray[np.float64]:
    """Sample fBm noise at each point.

    The permutation table, octave offsets and warp table are all drawn from
    one generator seeded with `seed`, so a field is fully determined by its
    seed. Use hashing.salted_seed() to give each field its own stream.

    Args:
        points: (n, 2) world (x, z) positions.
        seed: Noise seed; any int, reduced to 32 bits.
        config: Noise parameters.

    Returns:
        (n,) array of values in [0, config.amplitude].
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    rng = np.random.default_rng(seed & 0xFFFFFFFF)
    perm = permutation_table(rng)
    octave_offsets = rng.uniform(
        -_OCTAVE_OFFSET_RANGE, _OCTAVE_OFFSET_RANGE, size=(config.octaves, 2)
    )
    warp_perm = permutation_table(rng)

    xs = pts[:, 0]
    zs = pts[:, 1]

    if config.warp_strength > 0:
        wx = xs / config.warp_scale
        wz = zs / config.warp_scale
        warp_x = perlin_2d(warp_perm, wx, wz)
        warp_z = perlin_2d(warp_perm, wx + 5.2, wz + 1.3)
        xs = xs + config.warp_strength * warp_x
        zs = zs + config.warp_strength * warp_z

    offset_x, offset_z = config.offset
    result = np.zeros(len(pts), dtype=np.float64)
    amplitude = 1.0
    frequency = 1.0
    max_amplitude = 0.0

    for octave in range(config.octaves):
        sample_x = (xs / config.scale + offset_x) * frequency + octave_offsets[octave, 0]
        sample_z = (zs / config.scale + offset_z) * frequency + octave_offsets[octave, 1]
        result += amplitude * perlin_2d(perm, sample_x, sample_z)
        max_amplitude += amplitude
        amplitude *= config.persistence
        frequency *= config.lacunarity

    if max_amplitude > 0:
        result /= max_amplitude

    # [-1, 1] -> [0, 1]
    normalized = np.clip((result + 1.0) / 2.0, 0.0, 1.0)
    return normalized * config.amplitude


def smoothstep(edge0: float, edge1: float, x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Smooth Hermite interpolation between 0 and 1.

    Args:
        edge0: Lower edge of transition.
        edge1: Upper edge of transition.
        x: Input values.

    Returns:
        Smoothly interpolated values in [0, 1].
    """
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)
