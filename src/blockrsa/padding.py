"""Byte padding to a block boundary.

Each pad byte holds the pad length, which is always in `[1, block_size]`. Data that is already aligned still gets a
whole block of padding, so the trailing byte can always be trusted on removal.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from blockrsa.errors import InvalidPaddingError

MAX_BLOCK_SIZE: int = 255


def add_padding(data: bytes, block_size: int) -> bytes:
    """Pad `data` to a multiple of `block_size`.

    Args:
        data: The payload.
        block_size: Target block width in bytes. Must be in `[1, 255]` so the pad length fits in one byte.

    Returns:
        The padded payload.

    Raises:
        ValueError: If `block_size` is out of range.
    """
    if not 1 <= block_size <= MAX_BLOCK_SIZE:
        raise ValueError(f"Block size must be in range [1, {MAX_BLOCK_SIZE}]")
    pad_len = block_size - (len(data) % block_size)
    return bytes(data) + bytes([pad_len]) * pad_len


def remove_padding(data: bytes) -> bytes:
    """Strip the padding added by `add_padding`.

    Args:
        data: A padded payload.

    Returns:
        The payload without its padding.

    Raises:
        InvalidPaddingError: If the buffer is empty, the pad length is 0 or longer than the buffer, or the trailing
            bytes do not all equal the pad length.
    """
    if not data:
        raise InvalidPaddingError("Padded data cannot be empty.")
    pad_len = data[-1]
    if pad_len == 0 or pad_len > len(data):
        raise InvalidPaddingError(f"Pad length {pad_len} out of range for {len(data)} bytes.")
    if any(b != pad_len for b in data[-pad_len:]):
        raise InvalidPaddingError("Trailing padding bytes are inconsistent.")
    return bytes(data[:-pad_len])
