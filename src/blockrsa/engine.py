"""Block Cipher Engine: textbook RSA over a padded byte stream.

Plaintext is padded to a multiple of the key's plaintext block width, cut into blocks, and each block is encrypted
independently into a ciphertext block of the (possibly one byte wider) ciphertext width. The ciphertext format is
the bare concatenation of those blocks, with no header.

Typical usage example:

    pair = generate_key_pair(512)
    c = process(b"Hi there!", pair.public, "encrypt")
    r = process(c, pair.private, "decrypt")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import pathlib
import typing

from blockrsa.errors import BlockTooLargeError
from blockrsa.errors import MisalignedCiphertextError
from blockrsa.padding import add_padding
from blockrsa.padding import remove_padding
from blockrsa.rsa import bytes_to_integer
from blockrsa.rsa import integer_to_bytes
from blockrsa.rsa import RSAKey

Mode = typing.Literal["encrypt", "decrypt"]
MODES: tuple[str, ...] = typing.get_args(Mode)

logger = logging.getLogger(__name__)


def _check_key(key: RSAKey) -> None:
    if key.block_size < 1:
        raise ValueError(f"Modulus of {key.mod.bit_length()} bits is too small to hold a single byte block.")


def encrypt(data: bytes, key: RSAKey) -> bytes:
    """Encrypt a byte string block by block.

    Args:
        data: Arbitrary plaintext bytes.
        key: The public key `(e, n)`.

    Returns:
        Concatenated `key.cipher_size` byte ciphertext blocks, one per plaintext block including the padding block.

    Raises:
        ValueError: If the modulus is below 256.
        BlockTooLargeError: If a block is not below the modulus.
    """
    _check_key(key)
    bp, bc = key.block_size, key.cipher_size
    padded = add_padding(data, bp)
    logger.debug("Encrypting %d blocks (%d -> %d bytes each).", len(padded) // bp, bp, bc)
    out = bytearray()
    for i in range(0, len(padded), bp):
        m = bytes_to_integer(padded[i:i + bp])
        out += integer_to_bytes(key.c_rsa(m), bc)
    return bytes(out)


def decrypt(data: bytes, key: RSAKey) -> bytes:
    """Decrypt a byte string produced by `encrypt`.

    Padding is removed once from the fully decrypted buffer, it only ever spans the final block. Empty input is
    rejected as invalid padding, since `encrypt` never produces less than one block.

    Args:
        data: Concatenated ciphertext blocks.
        key: The private key `(d, n)`.

    Returns:
        The original plaintext.

    Raises:
        ValueError: If the modulus is below 256.
        MisalignedCiphertextError: If `data` is not a whole number of ciphertext blocks.
        BlockTooLargeError: If a ciphertext block is not below the modulus, or a decrypted block does not fit the
            plaintext width (wrong key).
        InvalidPaddingError: If the decrypted padding is inconsistent.
    """
    _check_key(key)
    bp, bc = key.block_size, key.cipher_size
    if len(data) % bc != 0:
        raise MisalignedCiphertextError(f"Ciphertext of {len(data)} bytes is not a multiple of {bc} byte blocks.")
    logger.debug("Decrypting %d blocks (%d -> %d bytes each).", len(data) // bc, bc, bp)
    out = bytearray()
    for i in range(0, len(data), bc):
        c = bytes_to_integer(data[i:i + bc])
        m = key.c_rsa(c)
        try:
            out += integer_to_bytes(m, bp)
        except OverflowError as exc:
            raise BlockTooLargeError(f"Decrypted block {i // bc} does not fit in {bp} bytes, wrong key?") from exc
    return remove_padding(bytes(out))


def process(data: bytes, key: RSAKey, mode: Mode) -> bytes:
    """Run the engine in the given direction.

    Args:
        data: Input buffer.
        key: `(e, n)` to encrypt or `(d, n)` to decrypt.
        mode: Either "encrypt" or "decrypt".

    Returns:
        The transformed buffer.

    Raises:
        ValueError: If `mode` is unknown.
    """
    if mode == "encrypt":
        return encrypt(data, key)
    if mode == "decrypt":
        return decrypt(data, key)
    raise ValueError(f"Mode must be one of {MODES}, got {mode!r}")


def process_file(source: pathlib.Path, destination: pathlib.Path, key: RSAKey, mode: Mode) -> int:
    """Run the engine over a whole file.

    The destination is only written once the whole input was processed successfully.

    Args:
        source: File to read.
        destination: File to write.
        key: Key passed to `process`.
        mode: Either "encrypt" or "decrypt".

    Returns:
        Number of bytes written.
    """
    with open(source, "rb") as f:
        data = f.read()
    result = process(data, key, mode)
    with open(destination, "wb") as f:
        f.write(result)
    logger.info("%s %s (%d bytes) -> %s (%d bytes).", mode.capitalize() + "ed", source, len(data), destination,
                len(result))
    return len(result)
