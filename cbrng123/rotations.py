"""Bit rotation, key-schedule parity and rotation constants for Threefry."""

from __future__ import annotations

SUPPORTED_WIDTHS = (32, 64)

_KS_PARITY = {
    32: 0x1BD11BDA,
    64: (0x1BD11BDA << 32) + 0xA9FC1A22,
}

# Eight rotation steps per schedule; each step holds one constant per
# word pair (one for 2-word generators, two for 4-word generators).
_ROTATIONS = {
    (2, 32): ((13,), (15,), (26,), (6,), (17,), (29,), (16,), (24,)),
    (2, 64): ((16,), (42,), (12,), (31,), (16,), (32,), (24,), (21,)),
    (4, 32): (
        (10, 26),
        (11, 21),
        (13, 27),
        (23, 5),
        (6, 20),
        (17, 11),
        (25, 10),
        (18, 20),
    ),
    (4, 64): (
        (14, 16),
        (52, 57),
        (23, 40),
        (5, 37),
        (25, 33),
        (46, 12),
        (58, 22),
        (32, 32),
    ),
}


def _check_width(width: int) -> None:
    if width not in SUPPORTED_WIDTHS:
        raise ValueError(f"unsupported word width {width!r}; expected 32 or 64")


def rotl(x: int, n: int, width: int) -> int:
    """Rotate the ``width``-bit word ``x`` left by ``n`` bits.

    The shift count is taken modulo ``width``, so rotating by ``width``
    (or by zero) leaves ``x`` unchanged.
    """
    _check_width(width)
    mask = (1 << width) - 1
    if not 0 <= x <= mask:
        raise ValueError(f"value {x!r} does not fit in {width} bits")
    bits = width - 1
    return ((x << (n & bits)) | (x >> ((width - n) & bits))) & mask


def ks_parity(width: int) -> int:
    """Return the key-schedule parity constant for ``width``-bit words."""
    _check_width(width)
    return _KS_PARITY[width]


def rotation_schedule(words: int, width: int) -> tuple[tuple[int, ...], ...]:
    """Return the eight-step rotation schedule for a ``words`` x ``width`` generator.

    Each step is a tuple with ``words // 2`` rotation amounts.
    """
    _check_width(width)
    try:
        return _ROTATIONS[(words, width)]
    except KeyError:
        raise ValueError(
            f"no rotation schedule for {words} words; expected 2 or 4"
        ) from None