"""Exceptions raised by the engine.

Every error carries its standard-library counterpart as a second base so that callers who only care about
"bad value" or "arithmetic went wrong" can keep catching the builtins.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class BlockRSAError(Exception):
    """Base class of all blockrsa errors."""


class NoInverseError(BlockRSAError, ArithmeticError):
    """The modular inverse does not exist, i.e. gcd(e, phi) != 1."""


class NoCoprimeExponentError(BlockRSAError, ArithmeticError):
    """No odd public exponent below phi is coprime with phi."""


class PrimeGenerationError(BlockRSAError, RuntimeError):
    """Prime sampling ran past its attempt cap."""


class InvalidPaddingError(BlockRSAError, ValueError):
    """Trailing padding bytes are inconsistent or the pad length is out of range."""


class BlockTooLargeError(BlockRSAError, ValueError):
    """A block integer is not strictly less than the modulus."""


class MisalignedCiphertextError(BlockRSAError, ValueError):
    """Ciphertext length is not a multiple of the ciphertext block width."""
