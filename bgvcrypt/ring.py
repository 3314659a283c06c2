"""Integer polynomial arithmetic over Z[x]/(x^d + 1) and the shared scheme settings."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

Poly = list[int]


def _normalize(coeffs: Sequence[int]) -> Poly:
    """Return the coefficients as a list without trailing zeros."""
    result = list(coeffs)
    while result and result[-1] == 0:
        result.pop()
    return result


def smod(value: int, modulus: int) -> int:
    """Reduce ``value`` into the symmetric range (-modulus/2, modulus/2]."""
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    r = value % modulus
    return r - modulus if 2 * r > modulus else r


def poly_smod(poly: Sequence[int], modulus: int) -> Poly:
    """Reduce every coefficient of ``poly`` symmetrically modulo ``modulus``."""
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    return _normalize([smod(c, modulus) for c in poly])


def poly_add(a: Sequence[int], b: Sequence[int]) -> Poly:
    """Sum of two polynomials."""
    longer, shorter = (a, b) if len(a) >= len(b) else (b, a)
    result = list(longer)
    for i, c in enumerate(shorter):
        result[i] += c
    return _normalize(result)


def poly_neg(a: Sequence[int]) -> Poly:
    """Negation of a polynomial."""
    return _normalize([-c for c in a])


def poly_scale(a: Sequence[int], k: int) -> Poly:
    """Multiply every coefficient of ``a`` by the integer ``k``."""
    return _normalize([c * k for c in a])


def poly_mul(a: Sequence[int], b: Sequence[int]) -> Poly:
    """Product of two polynomials over the integers."""
    a = _normalize(a)
    b = _normalize(b)
    if not a or not b:
        return []
    result = [0] * (len(a) + len(b) - 1)
    for i, x in enumerate(a):
        if x:
            for j, y in enumerate(b):
                result[i + j] += x * y
    return _normalize(result)


def poly_rem(a: Sequence[int], divisor: Sequence[int]) -> Poly:
    """Remainder of ``a`` divided by ``divisor``, whose leading coefficient must be 1 or -1."""
    div = _normalize(divisor)
    if not div:
        raise ZeroDivisionError("division by the zero polynomial")
    lead = div[-1]
    if lead not in (1, -1):
        raise ValueError("divisor must have leading coefficient 1 or -1")
    rem = _normalize(a)
    width = len(div)
    for top in range(len(rem) - 1, width - 2, -1):
        q = rem[top] * lead
        if q:
            offset = top - width + 1
            for j, c in enumerate(div):
                rem[offset + j] -= q * c
    return _normalize(rem)


def flog(x: int, base: int) -> int:
    """Largest n with base**n <= x."""
    if x < 1:
        raise ValueError("x must be at least 1")
    if base < 2:
        raise ValueError("base must be at least 2")
    n = 0
    power = base
    while power <= x:
        power *= base
        n += 1
    return n


def clog(x: int, base: int) -> int:
    """Smallest n with base**n >= x."""
    if x < 1:
        raise ValueError("x must be at least 1")
    if base < 2:
        raise ValueError("base must be at least 2")
    n = 0
    power = 1
    while power < x:
        power *= base
        n += 1
    return n


@dataclass
class RingContext:
    """Settings shared by every level of the scheme.

    ``d`` is the degree of the ring modulus x^d + 1, ``t`` the plaintext
    modulus, ``bound`` the noise bound, ``dvn`` the deviation of the error
    distribution and ``level`` the number of levels of the circuit.
    """

    d: int = 16
    t: int = 2
    bound: int = 1
    dvn: float = 8.0
    level: int = 2
    secparam: int = 0

    def __post_init__(self) -> None:
        if self.d < 0:
            raise ValueError("ring degree must not be negative")

    def modulus_poly(self) -> Poly:
        """The ring modulus x^d + 1."""
        coeffs = [0] * (self.d + 1)
        coeffs[self.d] = 1
        coeffs[0] = 1
        return _normalize(coeffs)

    def reduce(self, poly: Sequence[int]) -> Poly:
        """Reduce ``poly`` modulo x^d + 1."""
        return poly_rem(poly, self.modulus_poly())