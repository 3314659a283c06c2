import random
from dataclasses import dataclass, field

import pytest

from bgvcrypt.ring import RingContext, clog, poly_add, poly_mul, poly_neg, poly_smod
from bgvcrypt.scheme import (
    Ciphertext,
    LevelParams,
    add,
    basic_decrypt,
    basic_encrypt,
    bit_decomp,
    decrypt,
    encrypt,
    level_setup,
    mul,
    powers,
    scale,
    setup,
    switch_key,
    tensor,
)


@dataclass
class _Keys:
    pka: list = field(default_factory=list)
    pkb: list = field(default_factory=list)


def _inner(ctx, xs, ys, q):
    acc = []
    for a, b in zip(xs, ys):
        acc = poly_add(acc, poly_mul(a, b))
    return poly_smod(ctx.reduce(acc), q)


def _keypair(ctx, n, q, bign, seed):
    """Secret key and a noiseless public key for one level."""
    rng = random.Random(seed)
    s = [[1]] + [[rng.randrange(-1, 2) for _ in range(ctx.d)] for _ in range(n)]
    pk = []
    for _ in range(bign):
        a = [[rng.randrange(q) for _ in range(ctx.d)] for _ in range(n)]
        b = _inner(ctx, a, s[1:], q)
        pk.append([b] + [poly_smod(poly_neg(ai), q) for ai in a])
    return s, pk


@pytest.mark.parametrize("message", [[1], [0, 1], [1, 1, 0, 1], []])
def test_encrypt_decrypt_round_trip(message):
    ctx = RingContext(d=4, t=2, level=0)
    params = LevelParams(q=257, n=2, bign=6)
    sk, pk = _keypair(ctx, params.n, params.q, params.bign, seed=1)
    ct = encrypt(ctx, [params], [_Keys(pka=pk)], message)
    assert ct.level == 0
    assert len(ct.text) == params.n + 1
    assert decrypt(ctx, [params], [sk], ct) == message


def test_decrypt_picks_key_of_ciphertext_level():
    ctx = RingContext(d=4, t=2, level=1)
    params = [LevelParams(q=1031, n=1, bign=4), LevelParams(q=257, n=2, bign=6)]
    sk, pk = _keypair(ctx, 2, 257, 6, seed=7)
    text = basic_encrypt(ctx, params[1], pk, [1, 0, 1])
    ct = Ciphertext(text=text, level=0)
    junk = [[1], [1, 1, 1, 1]]
    assert decrypt(ctx, params, [junk, sk], ct) == [1, 0, 1]
    assert basic_decrypt(ctx, params[1], sk, text) == [1, 0, 1]


def test_decrypt_rejects_unknown_level():
    ctx = RingContext(d=4, t=2, level=1)
    params = [LevelParams(q=17, n=1, bign=2)]
    with pytest.raises(ValueError):
        decrypt(ctx, params, [[[1], []]], Ciphertext(text=[[], []], level=5))


def test_basic_encrypt_rejects_short_public_key():
    ctx = RingContext(d=4, t=2)
    params = LevelParams(q=17, n=1, bign=5)
    with pytest.raises(ValueError):
        basic_encrypt(ctx, params, [[[1], [1]]], [1])


def test_bit_decomp_and_powers_preserve_inner_product():
    ctx = RingContext(d=4, t=2)
    q = 100
    c = [[3, 0, 7], [50, 1, 0, 99]]
    s = [[1], [1, -1, 0, 1]]
    bits = bit_decomp(ctx, c, q)
    pw = powers(ctx, s, q)
    assert len(bits) == len(c) * clog(q, 2) == len(pw)
    assert all(0 <= coeff < ctx.t for poly in bits for coeff in poly)
    assert _inner(ctx, bits, pw, q) == _inner(ctx, c, s, q)


def test_bit_decomp_negative_coefficient_uses_truncating_division():
    ctx = RingContext(d=2, t=2)
    assert bit_decomp(ctx, [[-3]], 8) == [[1], [1], []]


def test_powers_of_one():
    ctx = RingContext(d=2, t=2)
    assert powers(ctx, [[1]], 8) == [[1], [2], [4]]


def test_scale_keeps_residue_and_shrinks():
    ctx = RingContext(d=2, t=2)
    q, p, r = 101, 11, 2
    values = list(range(-50, 51))
    out = scale(ctx, [[v] for v in values], q, p, r)
    for v, poly in zip(values, out):
        coeff = poly[0] if poly else 0
        assert (coeff - v) % r == 0
        assert abs(coeff) <= p // 2 + r


def test_tensor_is_symmetric_and_reduced():
    ctx = RingContext(d=4, t=2)
    q = 17
    x = [[1], [0, 1, 2], [3, 0, 0, 5]]
    out = tensor(ctx, x, q)
    size = len(x)
    assert len(out) == size * size
    for i in range(size):
        for j in range(size):
            assert out[j + i * size] == out[i + j * size]
    for poly in out:
        assert len(poly) <= ctx.d
        assert all(-q / 2 < coeff <= q / 2 for coeff in poly)


def test_switch_key_recovers_inner_product_with_source_key():
    ctx = RingContext(d=4, t=2)
    q = 64
    s = [[1], [1, 0, -1], [0, 1, 1, 1]]
    mapping = [[p, []] for p in powers(ctx, s, q)]
    c = [[5, 2], [0, 31, 7], [12, 0, 0, 3]]
    result = switch_key(ctx, mapping, c, q)
    assert len(result) == 2
    assert result[1] == []
    assert result[0] == _inner(ctx, c, s, q)


def test_switch_key_rejects_wrong_size():
    ctx = RingContext(d=4, t=2)
    with pytest.raises(ValueError):
        switch_key(ctx, [[[1], []]], [[1], [1]], 16)


def _zero_keys(qs, width):
    keys = [_Keys()]
    for q_hi, q_lo in zip(qs, qs[1:]):
        rows = width * width * clog(q_hi, 2) * clog(q_lo, 2)
        keys.append(_Keys(pkb=[[[] for _ in range(width)] for _ in range(rows)]))
    return keys


@pytest.mark.parametrize("operation", [add, mul])
def test_evaluation_lowers_level(operation):
    ctx = RingContext(d=4, t=2, level=1)
    qs = [18, 6]
    params = [LevelParams(q=q, n=1, bign=3) for q in qs]
    keys = _zero_keys(qs, 2)
    c1 = Ciphertext(text=[[1, 2], [3]], level=1)
    c2 = Ciphertext(text=[[0, 1], [1, 1]], level=1)
    result = operation(ctx, params, keys, c1, c2)
    assert result.level == 0
    assert result.text == [[], []]


@pytest.mark.parametrize("operation", [add, mul])
def test_evaluation_aligns_mixed_levels(operation):
    ctx = RingContext(d=4, t=2, level=2)
    qs = [18, 6, 2]
    params = [LevelParams(q=q, n=1, bign=3) for q in qs]
    keys = _zero_keys(qs, 2)
    c1 = Ciphertext(text=[[1, 2], [3]], level=2)
    c2 = Ciphertext(text=[[0, 1], [1]], level=1)
    result = operation(ctx, params, keys, c1, c2)
    assert result.level == 0
    assert len(result.text) == 2


@pytest.mark.parametrize("operation", [add, mul])
def test_evaluation_rejects_level_zero(operation):
    ctx = RingContext(d=4, t=2, level=1)
    qs = [18, 6]
    params = [LevelParams(q=q, n=1, bign=3) for q in qs]
    keys = _zero_keys(qs, 2)
    c1 = Ciphertext(text=[[1], [1]], level=1)
    c2 = Ciphertext(text=[[1], [1]], level=0)
    with pytest.raises(ValueError):
        operation(ctx, params, keys, c1, c2)


def test_setup_ring_variant():
    ctx = RingContext(t=2, bound=1)
    params = setup(ctx, 4, 2, True)
    assert ctx.level == 2
    assert len(params) == 3
    assert [p.q.bit_length() for p in params] == [9, 6, 3]
    assert all(p.n == 1 for p in params)
    assert ctx.d >= 1
    assert ctx.modulus_poly()[0] == 1 and len(ctx.modulus_poly()) == ctx.d + 1


def test_setup_lwe_variant_uses_degree_one():
    ctx = RingContext(t=2, bound=1)
    params = setup(ctx, 4, 2, False)
    assert ctx.d == 1
    assert len(params) == 3
    assert all(p.n >= 0 and p.bign >= p.n for p in params)


def test_level_setup_rejects_empty_modulus():
    ctx = RingContext(t=2, bound=1)
    with pytest.raises(ValueError):
        level_setup(ctx, 0, 4, True)