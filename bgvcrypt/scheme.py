"""The levelled BGV scheme: parameter setup, encryption and homomorphic evaluation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from itertools import zip_longest
from typing import Protocol

from .ring import Poly, RingContext, clog, flog, poly_add, poly_mul, poly_scale, poly_smod
from .sampling import random_bits, uniform_poly

Vector = list[Poly]
Matrix = list[list[Poly]]


class _PublicKeyLike(Protocol):
    pka: Matrix
    pkb: Matrix


@dataclass
class LevelParams:
    """Parameters of one level: modulus ``q``, dimension ``n`` and sample count ``bign``."""

    q: int
    n: int = 0
    bign: int = 0


@dataclass
class Ciphertext:
    """A ciphertext vector together with the level it lives on."""

    text: Vector
    level: int


def _trim(coeffs: list[int]) -> Poly:
    while coeffs and coeffs[-1] == 0:
        coeffs.pop()
    return coeffs


def _tdiv(a: int, b: int) -> int:
    """Integer division of ``a`` by the positive ``b``, rounding toward zero."""
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def _reduce_smod(ctx: RingContext, poly: Sequence[int], q: int) -> Poly:
    return poly_smod(ctx.reduce(poly), q)


def _random_modulus(bits: int) -> int:
    """A random integer of exactly ``bits`` bits (zero when ``bits`` is zero)."""
    if bits < 0:
        raise ValueError("bit length must not be negative")
    while True:
        value = random_bits(bits)
        if value.bit_length() == bits:
            return value


def level_setup(ctx: RingContext, miu: int, lamda: int, ring: bool) -> LevelParams:
    """Choose the parameters of one level with a modulus of ``miu`` bits."""
    q = _random_modulus(miu)
    prod = lamda * flog(q // ctx.bound, ctx.t)
    n = 1 if ring else prod
    return LevelParams(q=q, n=n, bign=(2 * n + 1) * flog(q, ctx.t))


def setup(ctx: RingContext, lamda: int, level: int, ring: bool) -> list[LevelParams]:
    """Choose parameters for every level, from the top level down to level 0.

    Updates ``ctx.level`` and the ring degree ``ctx.d``.
    """
    ctx.level = level
    miu = flog(lamda * level, ctx.t)
    q = _random_modulus((level + 1) * miu)
    prod = lamda * flog(q // ctx.bound, ctx.t)
    if ring:
        n = 1
        ctx.d = prod
    else:
        n = prod
        ctx.d = 1
    top = LevelParams(q=q, n=n, bign=(2 * n + 1) * flog(q, ctx.t))
    lower = [level_setup(ctx, (j + 1) * miu, lamda, ring) for j in range(level - 1, -1, -1)]
    return [top, *lower]


def basic_encrypt(ctx: RingContext, params: LevelParams, pk: Matrix, message: Sequence[int]) -> Vector:
    """Encrypt ``message`` under the public matrix ``pk`` of one level."""
    if len(pk) < params.bign:
        raise ValueError("public key has fewer rows than the level requires")
    rows = pk[: params.bign]
    randomness = [uniform_poly(ctx, ctx.t) for _ in rows]
    text = []
    for i in range(params.n + 1):
        acc: Poly = list(message) if i == 0 else []
        for row, r in zip(rows, randomness):
            acc = poly_add(acc, poly_mul(row[i], r))
        text.append(_reduce_smod(ctx, acc, params.q))
    return text


def basic_decrypt(ctx: RingContext, params: LevelParams, sk: Sequence[Poly], ct: Sequence[Poly]) -> Poly:
    """Decrypt the ciphertext vector ``ct`` with the secret vector ``sk``."""
    width = params.n + 1
    if len(ct) < width or len(sk) < width:
        raise ValueError("ciphertext or secret key is shorter than the level dimension")
    acc: Poly = []
    for c, s in zip(ct[:width], sk[:width]):
        acc = poly_add(acc, poly_mul(c, s))
    return poly_smod(poly_smod(ctx.reduce(acc), params.q), ctx.t)


def bit_decomp(ctx: RingContext, x: Sequence[Poly], q: int) -> Vector:
    """Split each element of ``x`` into base-t digit polynomials, grouped by digit.

    Digits beyond the ``clog(q, t)`` that fit are dropped.
    """
    length = clog(q, ctx.t)
    rows = len(x)
    result: Vector = [[] for _ in range(rows * length)]
    for i, poly in enumerate(x):
        digits = [[0] * ctx.d for _ in range(length)]
        for j, coeff in enumerate(poly[: ctx.d]):
            hold = coeff
            for digit in digits:
                if hold == 0:
                    break
                digit[j] = hold % ctx.t
                hold = _tdiv(hold, ctx.t)
        for k, coeffs in enumerate(digits):
            result[i + k * rows] = _trim(coeffs)
    return result


def powers(ctx: RingContext, x: Sequence[Poly], q: int) -> Vector:
    """Stack ``x``, ``t*x``, ``t^2*x``, ... reduced modulo ``q``, one block per digit."""
    length = clog(q, ctx.t)
    if length == 0:
        return []
    block = [list(p) for p in x]
    result = list(block)
    for _ in range(1, length):
        block = [poly_smod(poly_scale(p, ctx.t), q) for p in block]
        result.extend(block)
    return result


def _scale_coeff(c: int, q: int, p: int, r: int) -> int:
    base = c % r
    if c > 0:
        return (c * p // q) // r * r + base
    if c < 0:
        return base - ((-c) * p // q) // r * r
    return base


def scale(ctx: RingContext, c: Sequence[Poly], q: int, p: int, r: int) -> Vector:
    """Switch the coefficients of ``c`` from modulus ``q`` to ``p``, keeping them modulo ``r``."""
    if q <= 0 or r <= 0:
        raise ValueError("moduli must be positive")
    return [_trim([_scale_coeff(coeff, q, p, r) for coeff in poly]) for poly in c]


def switch_key(ctx: RingContext, mapping: Matrix, c: Sequence[Poly], q: int) -> Vector:
    """Multiply the bit decomposition of ``c`` by the switching matrix ``mapping``."""
    bits = bit_decomp(ctx, c, q)
    if len(bits) != len(mapping):
        raise ValueError(
            f"switching key has {len(mapping)} rows, decomposition needs {len(bits)}"
        )
    result = []
    for column in zip(*mapping):
        acc: Poly = []
        for b, m in zip(bits, column):
            acc = poly_add(acc, poly_mul(b, m))
        result.append(_reduce_smod(ctx, acc, q))
    return result


def refresh(ctx: RingContext, c: Sequence[Poly], mapping: Matrix, q: int, p: int, r: int) -> Vector:
    """Move ``c`` from modulus ``q`` to ``p`` and switch it to the next level's key."""
    return switch_key(ctx, mapping, scale(ctx, powers(ctx, c, q), q, p, r), p)


def tensor(ctx: RingContext, x: Sequence[Poly], q: int) -> Vector:
    """All pairwise ring products of the entries of ``x``, reduced modulo ``q``."""
    return [_reduce_smod(ctx, poly_mul(a, b), q) for a in x for b in x]


def encrypt(
    ctx: RingContext,
    params: Sequence[LevelParams],
    public_keys: Sequence[_PublicKeyLike],
    message: Sequence[int],
) -> Ciphertext:
    """Encrypt ``message`` at the top level."""
    if not params or not public_keys:
        raise ValueError("parameters and public keys must not be empty")
    text = basic_encrypt(ctx, params[0], public_keys[0].pka, message)
    return Ciphertext(text=text, level=ctx.level)


def decrypt(
    ctx: RingContext,
    params: Sequence[LevelParams],
    secret_keys: Sequence[Sequence[Poly]],
    ct: Ciphertext,
) -> Poly:
    """Decrypt ``ct`` with the secret key of the level it lives on."""
    index = ctx.level - ct.level
    if not 0 <= index < min(len(params), len(secret_keys)):
        raise ValueError(f"no key material for ciphertext level {ct.level}")
    return basic_decrypt(ctx, params[index], secret_keys[index], ct.text)


def _align(
    ctx: RingContext,
    params: Sequence[LevelParams],
    public_keys: Sequence[_PublicKeyLike],
    c1: Ciphertext,
    c2: Ciphertext,
) -> tuple[Vector, Vector, int, int, int]:
    """Bring the higher ciphertext down to the level of the lower one."""
    high, low = (c1, c2) if c1.level >= c2.level else (c2, c1)
    if high.level > ctx.level:
        raise ValueError(f"ciphertext level {high.level} exceeds the scheme level")
    if low.level < 1:
        raise ValueError("a ciphertext at level 0 cannot be evaluated further")
    needed = ctx.level - low.level + 2
    if len(params) < needed or len(public_keys) < needed:
        raise ValueError("not enough levels of parameters or keys")
    hp = ctx.level - high.level
    pk = hp + 1
    text = list(high.text)
    for _ in range(high.level - low.level):
        padded = text + [[] for _ in range(len(text) ** 2 - len(text))]
        text = refresh(ctx, padded, public_keys[pk].pkb, params[hp].q, params[hp + 1].q, ctx.t)
        hp += 1
        pk += 1
    return text, list(low.text), low.level, hp, pk


def add(
    ctx: RingContext,
    params: Sequence[LevelParams],
    public_keys: Sequence[_PublicKeyLike],
    c1: Ciphertext,
    c2: Ciphertext,
) -> Ciphertext:
    """Homomorphic sum; the result lives one level below the lower operand."""
    high, low, level, hp, pk = _align(ctx, params, public_keys, c1, c2)
    q = params[hp].q
    size = max(len(high), len(low))
    summed = [poly_smod(poly_add(a, b), q) for a, b in zip_longest(high, low, fillvalue=[])]
    padded = summed + [[] for _ in range(size * size - size)]
    text = refresh(ctx, padded, public_keys[pk].pkb, q, params[hp + 1].q, ctx.t)
    return Ciphertext(text=text, level=level - 1)


def mul(
    ctx: RingContext,
    params: Sequence[LevelParams],
    public_keys: Sequence[_PublicKeyLike],
    c1: Ciphertext,
    c2: Ciphertext,
) -> Ciphertext:
    """Homomorphic product; the result lives one level below the lower operand."""
    high, low, level, hp, pk = _align(ctx, params, public_keys, c1, c2)
    q = params[hp].q
    product = [_reduce_smod(ctx, poly_mul(a, b), q) for a in high for b in low]
    text = refresh(ctx, product, public_keys[pk].pkb, q, params[hp + 1].q, ctx.t)
    return Ciphertext(text=text, level=level - 1)