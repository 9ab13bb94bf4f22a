"""Two-word Threefry counter-based generators (2x32 and 2x64)."""

from __future__ import annotations

from collections.abc import Sequence

from cbrng123.rotations import ks_parity, rotation_schedule, rotl

DEFAULT_ROUNDS = 20
MAX_ROUNDS = 32


def _words(name: str, values: Sequence[int], width: int) -> tuple[int, int]:
    words = tuple(values)
    if len(words) != 2:
        raise ValueError(f"{name} must hold exactly 2 words, got {len(words)}")
    mask = (1 << width) - 1
    for word in words:
        if not isinstance(word, int) or not 0 <= word <= mask:
            raise ValueError(f"{name} word {word!r} does not fit in {width} bits")
    return words  # type: ignore[return-value]


def threefry2x(
    ctr: Sequence[int],
    key: Sequence[int],
    width: int,
    rounds: int = DEFAULT_ROUNDS,
) -> tuple[int, int]:
    """Apply ``rounds`` rounds of Threefry to a two-word counter under ``key``.

    ``width`` is the word size in bits (32 or 64); ``rounds`` may be 0 to 32.
    A key injection follows every fourth round.
    """
    schedule = rotation_schedule(2, width)
    if not 0 <= rounds <= MAX_ROUNDS:
        raise ValueError(f"rounds must be between 0 and {MAX_ROUNDS}, got {rounds!r}")
    c0, c1 = _words("ctr", ctr, width)
    k0, k1 = _words("key", key, width)
    mask = (1 << width) - 1

    ks = (k0, k1, ks_parity(width) ^ k0 ^ k1)
    x0 = (c0 + k0) & mask
    x1 = (c1 + k1) & mask

    for r in range(rounds):
        x0 = (x0 + x1) & mask
        x1 = rotl(x1, schedule[r % 8][0], width) ^ x0
        if (r + 1) % 4 == 0:
            s = (r + 1) // 4
            x0 = (x0 + ks[s % 3]) & mask
            x1 = (x1 + ks[(s + 1) % 3] + s) & mask

    return x0, x1


def threefry2x32(
    ctr: Sequence[int], key: Sequence[int], rounds: int = DEFAULT_ROUNDS
) -> tuple[int, int]:
    """Threefry with two 32-bit words."""
    return threefry2x(ctr, key, 32, rounds)


def threefry2x64(
    ctr: Sequence[int], key: Sequence[int], rounds: int = DEFAULT_ROUNDS
) -> tuple[int, int]:
    """Threefry with two 64-bit words."""
    return threefry2x(ctr, key, 64, rounds)