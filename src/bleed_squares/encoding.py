"""Float-to-hex encoding used by the splicer firmware.

The firmware expects a float32 as ``D`` followed by its four little-endian
bytes written last-to-first, i.e. the big-endian hex of the bit pattern.
"""

import re

import numpy as np

from bleed_squares.exceptions import EncodingError, EncodingOverflowError

PREFIX = "D"

_HEX_RE = re.compile(r"^D([0-9A-Fa-f]{8})$")


def bits_to_hex(bits: int) -> str:
    """Encode a raw 32-bit pattern.

    Examples:
        >>> bits_to_hex(0x3F800000)
        'D3F800000'
    """
    if not 0 <= bits <= 0xFFFFFFFF:
        raise EncodingError(f"bit pattern {bits:#x} does not fit in 32 bits")
    little_endian = np.array([bits], dtype="<u4").tobytes()
    return PREFIX + little_endian[::-1].hex().upper()


def hex_to_bits(text: str) -> int:
    """Decode an encoded value back to its raw 32-bit pattern."""
    match = _HEX_RE.match(text)
    if match is None:
        raise EncodingError(f"not an encoded float32: {text!r}")
    little_endian = bytes.fromhex(match.group(1))[::-1]
    return int(np.frombuffer(little_endian, dtype="<u4")[0])


def float_to_hex(value: float) -> str:
    """Encode ``value`` as a float32 in firmware byte order.

    Values outside the float32 range become infinities, as a float32 cast does.

    Examples:
        >>> float_to_hex(1.0)
        'D3F800000'
        >>> float_to_hex(-2.5)
        'DC0200000'
    """
    with np.errstate(over="ignore"):
        single = np.array([value], dtype="<f4")
    return bits_to_hex(int(single.view("<u4")[0]))


def hex_to_float(text: str) -> float:
    """Decode an encoded value to a Python float (exactly the float32 value)."""
    bits = hex_to_bits(text)
    return float(np.array([bits], dtype="<u4").view("<f4")[0])


def hex_field(value: int, digits: int, field: str) -> str:
    """Zero-padded upper-case hex of ``value`` in exactly ``digits`` digits.

    Raises:
        EncodingOverflowError: If the value needs more digits (or is negative)
    """
    if value < 0 or value >= 16**digits:
        raise EncodingOverflowError(field, value, digits)
    return f"{value:0{digits}X}"
