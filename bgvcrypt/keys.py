"""Secret, public and key-switching key generation for every level of the scheme."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .ring import Poly, RingContext, clog, poly_add, poly_mul, poly_neg, poly_scale, poly_smod
from .sampling import gaussian_poly, uniform_poly
from .scheme import LevelParams, bit_decomp, powers, scale, tensor

Vector = list[Poly]
Matrix = list[list[Poly]]


@dataclass
class PublicKey:
    """Public key of one level.

    ``pka`` is the encryption matrix; ``pkb`` is the switching matrix that
    moves ciphertexts of the level above onto this level's secret key.
    """

    pka: Matrix
    pkb: Matrix = field(default_factory=lambda: [[[]]])


@dataclass
class KeyChain:
    """Secret and public keys of all levels, ordered from the top level down."""

    secret_keys: list[Vector]
    public_keys: list[PublicKey]


def secret_keygen(ctx: RingContext, params: LevelParams) -> Vector:
    """A secret vector (1, s_1, ..., s_n) with small random ring elements."""
    rest = [poly_smod(gaussian_poly(ctx), params.q) for _ in range(params.n)]
    return [[1], *rest]


def public_keygen(ctx: RingContext, params: LevelParams, sk: Sequence[Poly]) -> Matrix:
    """A ``bign`` by ``n + 1`` matrix whose rows are noisy encryptions of zero under ``sk``."""
    if len(sk) < params.n + 1:
        raise ValueError("secret key is shorter than the level dimension")
    secret = sk[1 : params.n + 1]
    q = params.q
    matrix: Matrix = []
    for _ in range(params.bign):
        a = [uniform_poly(ctx, q) for _ in range(params.n)]
        b = poly_scale(gaussian_poly(ctx), ctx.t)
        for ai, si in zip(a, secret):
            b = poly_add(b, poly_mul(ai, si))
        row = [b, *(poly_neg(ai) for ai in a)]
        matrix.append([poly_smod(ctx.reduce(p), q) for p in row])
    return matrix


def switch_keygen(ctx: RingContext, s1: Sequence[Poly], s2: Sequence[Poly], q: int) -> Matrix:
    """A matrix that switches ciphertexts decryptable under ``s1`` to ``s2`` modulo ``q``."""
    if not s2:
        raise ValueError("target secret key must not be empty")
    params = LevelParams(q=q, n=len(s2) - 1, bign=len(s1) * clog(q, ctx.t))
    mapping = public_keygen(ctx, params, s2)
    for row, shifted in zip(mapping, powers(ctx, s1, q)):
        row[0] = poly_smod(ctx.reduce(poly_add(row[0], shifted)), q)
    return mapping


def keygen(ctx: RingContext, params: Sequence[LevelParams]) -> KeyChain:
    """Generate keys for the top level and every level below it down to level 0."""
    if len(params) < ctx.level + 1:
        raise ValueError(f"need parameters for {ctx.level + 1} levels, got {len(params)}")
    top = params[0]
    top_sk = secret_keygen(ctx, top)
    secret_keys: list[Vector] = [top_sk]
    public_keys = [PublicKey(pka=public_keygen(ctx, top, top_sk), pkb=[[[]]])]
    for upper, lower in zip(params[: ctx.level], params[1 : ctx.level + 1]):
        sk = secret_keygen(ctx, lower)
        pka = public_keygen(ctx, lower, sk)
        decomposed = bit_decomp(ctx, tensor(ctx, secret_keys[-1], upper.q), upper.q)
        scaled = scale(ctx, decomposed, upper.q, lower.q, ctx.t)
        pkb = switch_keygen(ctx, scaled, sk, lower.q)
        secret_keys.append(sk)
        public_keys.append(PublicKey(pka=pka, pkb=pkb))
    return KeyChain(secret_keys=secret_keys, public_keys=public_keys)