"""Command that runs a small demonstration of homomorphic addition and multiplication."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from .keys import keygen
from .ring import Poly, RingContext
from .scheme import LevelParams, add, decrypt, encrypt, mul


def _format_poly(poly: Poly) -> str:
    """Render a polynomial as its length followed by its coefficients."""
    if not poly:
        return "0"
    return f"{len(poly)}  " + " ".join(str(c) for c in poly)


def main(argv: Sequence[str] | None = None) -> int:
    """Encrypt two messages, evaluate a small circuit on them and print the decryptions."""
    parser = argparse.ArgumentParser(
        prog="bgvcrypt",
        description="Demonstrate levelled homomorphic evaluation on fixed toy parameters.",
    )
    parser.parse_args(argv)

    ctx = RingContext(d=16, t=2, bound=1, dvn=8.0, level=2)
    params = [
        LevelParams(q=18, n=1, bign=15),
        LevelParams(q=6, n=1, bign=9),
        LevelParams(q=2, n=1, bign=6),
    ]
    ms = [0, 1, 0, 0, 1]
    mt = [0, 1]

    print(ctx.d)

    keys = keygen(ctx, params)
    ct = encrypt(ctx, params, keys.public_keys, ms)
    ct1 = encrypt(ctx, params, keys.public_keys, mt)

    product = mul(ctx, params, keys.public_keys, ct, ct1)
    print("ct * ct1 (9*2) =")
    print(_format_poly(decrypt(ctx, params, keys.secret_keys, product)))

    summed = add(ctx, params, keys.public_keys, ct, ct1)
    print("ct + ct1 (9+2) =")
    print(_format_poly(decrypt(ctx, params, keys.secret_keys, summed)))

    combined = mul(ctx, params, keys.public_keys, summed, product)
    print("nct1 = (ct+ct1)*ct*ct1 = (9+2)*9*2 =")
    print(_format_poly(decrypt(ctx, params, keys.secret_keys, combined)))
    print("over.....")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())