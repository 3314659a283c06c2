"""Random sources for keys, noise and encryption randomness."""

from __future__ import annotations

import math
import random
import secrets

from .ring import Poly, RingContext

PI = 3.1415926

_rng = random.SystemRandom()


def random_bits(length: int) -> int:
    """A uniformly random non-negative integer below 2**length."""
    if length < 0:
        raise ValueError("bit length must not be negative")
    return secrets.randbits(length)


def sample_z(ctx: RingContext) -> list[int]:
    """Draw ``ctx.d`` small integers from the discrete error distribution."""
    if ctx.d == 0:
        return []
    dvn = ctx.dvn
    low = math.ceil(-10 * dvn)
    high = math.floor(10 * dvn)
    if high <= low:
        raise ValueError("deviation is too small to define a sampling range")
    samples = []
    for _ in range(ctx.d):
        while True:
            x = _rng.randrange(low, high)
            p = math.exp(-PI * x / (dvn * dvn))
            if 0 < p <= 1:
                break
        samples.append(x)
    return samples


def gaussian_poly(ctx: RingContext) -> Poly:
    """A ring element whose coefficients come from :func:`sample_z`."""
    coeffs = sample_z(ctx)
    while coeffs and coeffs[-1] == 0:
        coeffs.pop()
    return coeffs


def uniform_poly(ctx: RingContext, space: int) -> Poly:
    """A ring element with ``ctx.d`` coefficients uniform in [0, space)."""
    if space <= 0:
        raise ValueError("space must be positive")
    coeffs = [_rng.randrange(space) for _ in range(ctx.d)]
    while coeffs and coeffs[-1] == 0:
        coeffs.pop()
    return coeffs