"""Textbook RSA block encryption in an Academic Sense.

Provides RSA key generation on top of a Fermat probable-prime test, and block-oriented encryption/decryption of
arbitrary byte strings and files with the raw `(exponent, modulus)` pair. Keys can be stored as PEM (PKCS1 public,
PKCS8 private) or exchanged as decimal text. Not hardened against anything; see `blockrsa.randomness` for the seam
where a secure generator plugs in.

Typical usage example:

    pair = generate_key_pair(1024)
    c = encrypt(b"Hi there!", pair.public)
    r = decrypt(c, pair.private)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from blockrsa.engine import decrypt
from blockrsa.engine import encrypt
from blockrsa.engine import process
from blockrsa.engine import process_file
from blockrsa.errors import BlockRSAError
from blockrsa.errors import BlockTooLargeError
from blockrsa.errors import InvalidPaddingError
from blockrsa.errors import MisalignedCiphertextError
from blockrsa.errors import NoCoprimeExponentError
from blockrsa.errors import NoInverseError
from blockrsa.errors import PrimeGenerationError
from blockrsa.keygen import generate_key_pair
from blockrsa.keygen import generate_prime
from blockrsa.numtheory import extended_gcd
from blockrsa.numtheory import is_probable_prime
from blockrsa.numtheory import mod_inverse
from blockrsa.numtheory import mod_pow
from blockrsa.numtheory import random_bits
from blockrsa.padding import add_padding
from blockrsa.padding import remove_padding
from blockrsa.randomness import RandomSource
from blockrsa.randomness import SecureRandomSource
from blockrsa.rsa import key_from_text
from blockrsa.rsa import KeyPair
from blockrsa.rsa import RSAKey
from blockrsa.rsa import RSAPrivKey
from blockrsa.rsa import RSAPubKey

__version__ = "0.1.0"
__all__ = [
    "BlockRSAError",
    "BlockTooLargeError",
    "InvalidPaddingError",
    "KeyPair",
    "MisalignedCiphertextError",
    "NoCoprimeExponentError",
    "NoInverseError",
    "PrimeGenerationError",
    "RSAKey",
    "RSAPrivKey",
    "RSAPubKey",
    "RandomSource",
    "SecureRandomSource",
    "add_padding",
    "decrypt",
    "encrypt",
    "extended_gcd",
    "generate_key_pair",
    "generate_prime",
    "is_probable_prime",
    "key_from_text",
    "mod_inverse",
    "mod_pow",
    "process",
    "process_file",
    "random_bits",
    "remove_padding",
]
