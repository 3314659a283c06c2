# bgvcrypt

`bgvcrypt` is a compact, pure-Python leveled BGV (Brakerski–Gentry–Vaikuntanathan)
homomorphic encryption scheme. Ciphertexts live in the ring `Z[x]/(x^d + 1)`.
You can add and multiply them without decrypting them. Each homomorphic
operation uses modulus switching and key switching to move its result one
level down a chain of moduli.

The package is meant for experiments and teaching. Its parameters are
toy-sized and give no real security. It has no dependencies outside the
standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Demo

```
bgvcrypt-demo
```

The demo takes no options apart from `--help`. It uses fixed toy settings:

- the ring `x^16 + 1`;
- plaintext modulus 2;
- noise bound 1 and deviation 8.0;
- two levels, with moduli 18, 6 and 2 for the three levels of the chain.

It prints the ring degree and then goes through these steps:

1. Generates the keys.
2. Encrypts the messages `x + x^4` and `x`.
3. Multiplies them, adds them, and multiplies the sum by the product.
4. Prints each decrypted result.

A result is printed as its number of coefficients followed by the
coefficients, or as `0` for the zero polynomial. The moduli are tiny, so the
decrypted values are not guaranteed to equal the plaintext results.

## Library use

### `bgvcrypt.ring`

Polynomials are plain lists of integer coefficients, lowest degree first,
with no trailing zeros.

- `RingContext` holds the settings shared by the whole scheme:
  - `d`, the ring degree;
  - `t`, the plaintext modulus;
  - `bound`, the noise bound;
  - `dvn`, the deviation of the error distribution;
  - `level`, the number of levels;
  - `secparam`.

  `modulus_poly()` returns `x^d + 1`, and `reduce(poly)` reduces a polynomial
  modulo it.
- Polynomial helpers: `poly_add`, `poly_neg`, `poly_scale`, `poly_mul` and
  `poly_rem`. `poly_rem` needs a divisor whose leading coefficient is 1 or -1.
- `smod` and `poly_smod` reduce into the symmetric range
  `(-m/2, m/2]`.
- `flog` and `clog` return the floor and ceiling integer logarithms.

### `bgvcrypt.sampling`

- `random_bits(length)` returns a random integer below `2**length`.
- `sample_z(ctx)` draws `ctx.d` small integers for the error distribution.
- `gaussian_poly(ctx)` returns a ring element built from those integers.
- `uniform_poly(ctx, space)` returns a ring element whose coefficients are
  uniform in `[0, space)`.

### `bgvcrypt.scheme`

- `LevelParams(q, n, bign)` holds the parameters of one level.
- `Ciphertext(text, level)` is a ciphertext vector together with its level.
- `setup(ctx, lamda, level, ring)` builds a random chain of `LevelParams`,
  from the top level down to level 0. It also sets `ctx.level` and `ctx.d`.
  `level_setup` builds a single level.
- `encrypt(ctx, params, public_keys, message)` encrypts a message at the top
  level.
- `decrypt(ctx, params, secret_keys, ct)` decrypts with the key of the
  ciphertext's level.
- `add` and `mul` work on two ciphertexts. They first bring the higher one
  down to the lower one's level. The result lives one level below the lower
  operand. A ciphertext at level 0 cannot be evaluated further, and trying
  raises `ValueError`.
- The lower-level building blocks are `basic_encrypt`, `basic_decrypt`,
  `bit_decomp`, `powers`, `scale`, `switch_key`, `refresh` and `tensor`.

### `bgvcrypt.keys`

- `keygen(ctx, params)` returns a `KeyChain`. Its `secret_keys` and
  `public_keys` hold one entry per level, ordered from the top level down.
- Each `PublicKey` has an encryption matrix `pka` and a switching matrix
  `pkb`. `pkb` moves ciphertexts from the level above onto this level's
  secret key.
- The pieces behind `keygen` are `secret_keygen`, `public_keygen` and
  `switch_keygen`.

### Example

```python
from bgvcrypt.ring import RingContext
from bgvcrypt.scheme import LevelParams, encrypt, decrypt, add
from bgvcrypt.keys import keygen

ctx = RingContext(d=16, t=2, bound=1, dvn=8.0, level=2)
params = [LevelParams(q=18, n=1, bign=15),
          LevelParams(q=6, n=1, bign=9),
          LevelParams(q=2, n=1, bign=6)]
keys = keygen(ctx, params)
a = encrypt(ctx, params, keys.public_keys, [0, 1])
b = encrypt(ctx, params, keys.public_keys, [1])
total = add(ctx, params, keys.public_keys, a, b)
print(decrypt(ctx, params, keys.secret_keys, total))
```

## What the package does not do

- Keys and ciphertexts exist only as in-memory Python objects. The package
  cannot save, load or serialise them.
- The only command is the fixed demo. There is no command for encrypting or
  decrypting your own data.
- Parameters are not checked for security or for correct decryption. With
  small moduli, noise can make decrypted results wrong.