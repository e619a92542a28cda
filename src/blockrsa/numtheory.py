"""Number theory primitives behind key generation and the block engine.

Modular exponentiation, the Extended Euclidean Algorithm, modular inversion, the Fermat probable-prime test and
random fixed-length integers. Python's `int` is the arbitrary-precision primitive throughout.

Typical usage example:

    mod_pow(33, 43, 77)
    mod_inverse(7, 60)
    is_probable_prime(9973, rounds=5)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from blockrsa.errors import NoInverseError
from blockrsa.randomness import default_source
from blockrsa.randomness import RandomSource

DEFAULT_ROUNDS: int = 5


def mod_pow(base: int, exp: int, mod: int) -> int:
    """Square-and-multiply modular exponentiation.

    Args:
        base: The base. Any integer; reduced modulo `mod` first.
        exp: The exponent. Must be >= 0.
        mod: The modulus. Must be > 0.

    Returns:
        `base**exp % mod`, in `[0, mod)`.

    Raises:
        ValueError: If `mod` is not positive or `exp` is negative.
    """
    if mod <= 0:
        raise ValueError("Modulus must be > 0")
    if exp < 0:
        raise ValueError("Exponent must be >= 0")
    result = 1 % mod
    base %= mod
    while exp > 0:
        if exp & 1:
            result = (result * base) % mod
        exp >>= 1
        base = (base * base) % mod
    return result


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*x + b*y = g = gcd(a, b). Iterative, so large operands cannot hit the recursion limit. For `a == 0` the
    result is `(b, 0, 1)`.

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of both integers, followed by the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of `a` and `b`."""
    return extended_gcd(a, b)[0]


def mod_inverse(e: int, phi: int) -> int:
    """Compute the multiplicative inverse of `e` modulo `phi`.

    Args:
        e: The value to invert.
        phi: The modulus. Must be > 0.

    Returns:
        `d` in `[0, phi)` such that `e*d % phi == 1 % phi`.

    Raises:
        ValueError: If `phi` is not positive.
        NoInverseError: If `gcd(e, phi) != 1`.
    """
    if phi <= 0:
        raise ValueError("phi must be > 0")
    g, x, _ = extended_gcd(e, phi)
    if g != 1:
        raise NoInverseError(f"{e} has no inverse modulo {phi} (gcd {g}).")
    return ((x % phi) + phi) % phi


def is_probable_prime(n: int, rounds: int = DEFAULT_ROUNDS, rng: RandomSource | None = None) -> bool:
    """Perform the Fermat primality test.

    Each round draws a witness `a` uniformly from `[2, n-2]` and rejects `n` as soon as `a**(n-1) % n != 1`.
    A prime always passes. A composite passes only if every witness is a Fermat liar; Carmichael numbers are liars for
    every witness coprime to them, so they are accepted with noticeable probability. That is an accepted property of
    this test, `rounds` is the only accuracy knob.

    Args:
        n: The candidate.
        rounds: Number of random witnesses to try. Must be >= 1.
        rng: Randomness Source for witnesses. Defaults to the process-wide source.

    Returns:
        True if `n` is probably prime, False if it is certainly composite.
    """
    if rounds < 1:
        raise ValueError("rounds must be >= 1")
    if n <= 1:
        return False
    if n == 2 or n == 3:
        return True
    if n % 2 == 0:
        return False
    rng = rng if rng is not None else default_source()
    for _ in range(rounds):
        a = rng.randbelow(n - 3) + 2
        if mod_pow(a, n - 1, n) != 1:
            return False
    return True


def random_bits(bits: int, rng: RandomSource | None = None) -> int:
    """Draw a random integer of exactly `bits` bits.

    Args:
        bits: Bit length of the result. Must be >= 1.
        rng: Randomness Source. Defaults to the process-wide source.

    Returns:
        An integer whose bit `bits-1` is set, i.e. in `[2**(bits-1), 2**bits)`.
    """
    if bits < 1:
        raise ValueError("bits must be >= 1")
    rng = rng if rng is not None else default_source()
    return rng.randbits(bits) | (1 << (bits - 1))
