"""Randomness Source used by prime sampling and the Fermat test.

The default source is a general-purpose Mersenne Twister seeded from the system entropy pool. It is NOT a
cryptographically secure generator. `SecureRandomSource` is the drop-in replacement for anyone who needs key material
that withstands an attacker; it is never selected implicitly.

Typical usage example:

    rng = RandomSource(seed=1234)
    w = rng.word()
    x = rng.randbits(100)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random
import secrets
import threading

WORD_BITS: int = 64
_WORD_MASK: int = (1 << WORD_BITS) - 1

_DEFAULT_SOURCE: "RandomSource | None" = None
_DEFAULT_LOCK = threading.Lock()


class RandomSource:
    """Injectable generator of uniform 64-bit words.

    Attributes:
        seeded: Whether the source was given an explicit seed (and is therefore reproducible).
    """

    def __init__(self, seed: int | None = None) -> None:
        """Initialize the source.

        Args:
            seed: Explicit seed for reproducible draws. If None, the generator seeds itself from the OS entropy pool.
        """
        self._lock = threading.Lock()
        self._gen = self._make_generator(seed)
        self.seeded = seed is not None

    @staticmethod
    def _make_generator(seed: int | None) -> random.Random:
        # random.Random(None) pulls its seed from os.urandom.
        return random.Random(seed)

    def reseed(self, seed: int) -> None:
        """Reseed the generator, making subsequent draws reproducible."""
        with self._lock:
            self._gen.seed(seed)
        self.seeded = True

    def word(self) -> int:
        """Draw one uniformly distributed 64-bit word."""
        with self._lock:
            return self._gen.getrandbits(WORD_BITS) & _WORD_MASK

    def randbits(self, bits: int) -> int:
        """Draw `bits` independent uniform bits, assembled from 64-bit words.

        Args:
            bits: Number of bits to draw. Must be >= 0.

        Returns:
            An integer in `[0, 2**bits)`.
        """
        if bits < 0:
            raise ValueError("bits must be >= 0")
        result = 0
        filled = 0
        # One lock for the whole draw, so concurrent draws never interleave words.
        with self._lock:
            while filled < bits:
                result |= (self._gen.getrandbits(WORD_BITS) & _WORD_MASK) << filled
                filled += WORD_BITS
        return result & ((1 << bits) - 1)

    def randbelow(self, n: int) -> int:
        """Draw a uniform integer in `[0, n)`.

        Raises:
            ValueError: If `n` is not positive.
        """
        if n <= 0:
            raise ValueError("n must be > 0")
        with self._lock:
            return self._gen.randrange(n)


class SecureRandomSource(RandomSource):
    """Randomness Source backed by the operating system CSPRNG.

    Hardening seam: pass an instance wherever an `rng` is accepted to produce key material from `secrets` instead of
    the Mersenne Twister. Cannot be reseeded.
    """

    def __init__(self) -> None:
        super().__init__()
        self.seeded = False

    @staticmethod
    def _make_generator(seed: int | None) -> random.Random:
        return secrets.SystemRandom()

    def reseed(self, seed: int) -> None:
        raise NotImplementedError("The system CSPRNG cannot be reseeded.")


def default_source() -> RandomSource:
    """Get the process-wide Randomness Source, constructing it on first use."""
    global _DEFAULT_SOURCE
    with _DEFAULT_LOCK:
        if _DEFAULT_SOURCE is None:
            _DEFAULT_SOURCE = RandomSource()
        return _DEFAULT_SOURCE


def reset_default_source(source: RandomSource | None = None) -> RandomSource:
    """Replace the process-wide Randomness Source.

    Args:
        source: The new source. If None, a freshly entropy-seeded `RandomSource` is installed.

    Returns:
        The installed source.
    """
    global _DEFAULT_SOURCE
    with _DEFAULT_LOCK:
        _DEFAULT_SOURCE = source if source is not None else RandomSource()
        return _DEFAULT_SOURCE
