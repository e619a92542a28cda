"""Key Generation Utility, mainly focusing on the generation of random probable primes.

Primes are found by rejection sampling: draw a random integer of the wanted length, make it odd, and keep it if it
passes the Fermat test. The public exponent is 65537 whenever that is coprime with phi, otherwise the smallest
suitable odd number.

Typical usage example:

    p = generate_prime(512)
    pair = generate_key_pair(1024)
    c = pair.public.c_rsa(42)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import warnings

from blockrsa.errors import NoCoprimeExponentError
from blockrsa.errors import PrimeGenerationError
from blockrsa.numtheory import DEFAULT_ROUNDS
from blockrsa.numtheory import gcd
from blockrsa.numtheory import is_probable_prime
from blockrsa.numtheory import mod_inverse
from blockrsa.numtheory import random_bits
from blockrsa.randomness import default_source
from blockrsa.randomness import RandomSource
from blockrsa.rsa import KeyPair
from blockrsa.rsa import RSAPrivKey
from blockrsa.rsa import RSAPubKey

DEFAULT_PUBLIC_EXPONENT: int = 65537
MINIMUM_KEY_BITS: int = 10  # Two 5-bit primes give n >= 17 * 19 = 323, enough for one byte blocks.
MINIMUM_SECURE_BITS: int = 1024
_MINIMUM_ATTEMPTS: int = 1000

logger = logging.getLogger(__name__)


def _attempt_cap(bits: int, max_attempts: int | None) -> int:
    if max_attempts is None:
        return max(bits * 100, _MINIMUM_ATTEMPTS)
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    return max_attempts


def generate_prime(bits: int,
                   rounds: int = DEFAULT_ROUNDS,
                   rng: RandomSource | None = None,
                   max_attempts: int | None = None) -> int:
    """Generate a probable prime number of the specified bit size.

    Args:
        bits: The size of the prime to generate in bits. Must be >= 2.
        rounds: Fermat rounds per candidate.
        rng: Randomness Source. Defaults to the process-wide source.
        max_attempts: Number of candidates to try before giving up. Defaults to `bits * 100`, but at least 1000.

    Returns:
        A probable prime of exactly `bits` bits.

    Raises:
        PrimeGenerationError: If no candidate passed within `max_attempts`.
    """
    if bits < 2:
        raise ValueError("Prime size must be at least 2 bits.")
    rng = rng if rng is not None else default_source()
    cap = _attempt_cap(bits, max_attempts)
    for attempt in range(1, cap + 1):
        candidate = random_bits(bits, rng)
        if candidate % 2 == 0:
            candidate += 1
        if is_probable_prime(candidate, rounds, rng):
            logger.debug("Found %d-bit probable prime after %d candidates.", bits, attempt)
            return candidate
    raise PrimeGenerationError(
        f"Run an improbable {cap} amount of loops with no prime found. Check the randomness source.")


def select_public_exponent(phi: int, preferred: int = DEFAULT_PUBLIC_EXPONENT) -> int:
    """Choose the public exponent for a given totient.

    Args:
        phi: Euler's totient of the modulus, `(p-1)*(q-1)`.
        preferred: Exponent to use when it is coprime with `phi`.

    Returns:
        `preferred` if `gcd(preferred, phi) == 1`, otherwise the smallest odd `i >= 3` below `phi` coprime with it.

    Raises:
        NoCoprimeExponentError: If no odd exponent below `phi` is coprime with it.
    """
    if gcd(preferred, phi) == 1:
        return preferred
    logger.debug("Exponent %d shares a factor with phi, scanning for a fallback.", preferred)
    for i in range(3, phi, 2):
        if gcd(i, phi) == 1:
            return i
    raise NoCoprimeExponentError(f"No odd exponent below {phi} is coprime with it.")


def generate_key_pair(bits: int, rounds: int = DEFAULT_ROUNDS, rng: RandomSource | None = None) -> KeyPair:
    """Generates an RSA key pair.

    Fully generates a valid RSA Key, including the primes, the public exponent and the private exponent.

    Args:
        bits: The requested modulus size in bits. Must be even and at least 10. The modulus itself may come out one
            bit shorter, since only the top bit of each prime is fixed.
        rounds: Fermat rounds per prime candidate.
        rng: Randomness Source. Defaults to the process-wide source.

    Returns:
        A `KeyPair` of the public `(e, n)` and private `(d, n)` keys. The private key also remembers `p` and `q`.

    Raises:
        ValueError: If `bits` is odd or too small.
        PrimeGenerationError: If prime sampling ran past its attempt cap.
        NoCoprimeExponentError: If no public exponent could be chosen.
    """
    if not isinstance(bits, int) or bits < MINIMUM_KEY_BITS:
        raise ValueError(f"Size must be an integer of at least {MINIMUM_KEY_BITS}.")
    if bits % 2 != 0:
        raise ValueError("Size must be an even number.")
    if bits < MINIMUM_SECURE_BITS:
        warnings.warn(f"Key sizes below {MINIMUM_SECURE_BITS} bits are insecure! Please use with care.",
                      RuntimeWarning)
    rng = rng if rng is not None else default_source()
    half = bits // 2
    p = generate_prime(half, rounds, rng)
    q = generate_prime(half, rounds, rng)
    for _ in range(_attempt_cap(half, None)):
        if p != q:
            break
        q = generate_prime(half, rounds, rng)  # (Un)Likely story.
    else:
        raise PrimeGenerationError("Could not find two distinct primes.")
    n = p * q
    phi = (p - 1) * (q - 1)
    e = select_public_exponent(phi)
    d = mod_inverse(e, phi)
    logger.info("Generated %d-bit modulus with public exponent %d.", n.bit_length(), e)
    return KeyPair(RSAPubKey(n, e), RSAPrivKey(n, e, d, p, q))
