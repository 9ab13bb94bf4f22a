"""Four-word Threefry generators and a generator object over all Threefry shapes."""

from __future__ import annotations

from collections.abc import Sequence

from cbrng123.rotations import ks_parity, rotation_schedule, rotl
from cbrng123.threefry2x import MAX_ROUNDS as MAX_ROUNDS_2X
from cbrng123.threefry2x import threefry2x

DEFAULT_ROUNDS = 20
MAX_ROUNDS_4X = 72

_MAX_ROUNDS = {2: MAX_ROUNDS_2X, 4: MAX_ROUNDS_4X}


def _words(name: str, values: Sequence[int], count: int, width: int) -> list[int]:
    words = list(values)
    if len(words) != count:
        raise ValueError(f"{name} must hold exactly {count} words, got {len(words)}")
    mask = (1 << width) - 1
    for word in words:
        if not isinstance(word, int) or not 0 <= word <= mask:
            raise ValueError(f"{name} word {word!r} does not fit in {width} bits")
    return words


def threefry4x(
    ctr: Sequence[int],
    key: Sequence[int],
    width: int,
    rounds: int = DEFAULT_ROUNDS,
) -> tuple[int, int, int, int]:
    """Apply ``rounds`` rounds of Threefry to a four-word counter under ``key``.

    ``width`` is the word size in bits (32 or 64); ``rounds`` may be 0 to 72.
    A key injection follows every fourth round.
    """
    schedule = rotation_schedule(4, width)
    if not 0 <= rounds <= MAX_ROUNDS_4X:
        raise ValueError(
            f"rounds must be between 0 and {MAX_ROUNDS_4X}, got {rounds!r}"
        )
    x = _words("ctr", ctr, 4, width)
    k = _words("key", key, 4, width)
    mask = (1 << width) - 1

    parity = ks_parity(width)
    for word in k:
        parity ^= word
    ks = (*k, parity)
    x = [(c + kw) & mask for c, kw in zip(x, k)]

    for r in range(rounds):
        rot_a, rot_b = schedule[r % 8]
        if r % 2 == 0:
            x[0] = (x[0] + x[1]) & mask
            x[1] = rotl(x[1], rot_a, width) ^ x[0]
            x[2] = (x[2] + x[3]) & mask
            x[3] = rotl(x[3], rot_b, width) ^ x[2]
        else:
            x[0] = (x[0] + x[3]) & mask
            x[3] = rotl(x[3], rot_a, width) ^ x[0]
            x[2] = (x[2] + x[1]) & mask
            x[1] = rotl(x[1], rot_b, width) ^ x[2]
        if (r + 1) % 4 == 0:
            s = (r + 1) // 4
            x = [(word + ks[(s + i) % 5]) & mask for i, word in enumerate(x)]
            x[3] = (x[3] + s) & mask

    return x[0], x[1], x[2], x[3]


def threefry4x32(
    ctr: Sequence[int], key: Sequence[int], rounds: int = DEFAULT_ROUNDS
) -> tuple[int, int, int, int]:
    """Threefry with four 32-bit words."""
    return threefry4x(ctr, key, 32, rounds)


def threefry4x64(
    ctr: Sequence[int], key: Sequence[int], rounds: int = DEFAULT_ROUNDS
) -> tuple[int, ...]:
    """Threefry with four 64-bit words."""
    return threefry4x(ctr, key, 64, rounds)


def threefry(
    ctr: Sequence[int],
    key: Sequence[int],
    width: int,
    rounds: int = DEFAULT_ROUNDS,
) -> tuple[int, ...]:
    """Apply Threefry to a counter of 2 or 4 words, chosen by the counter's length."""
    words = len(ctr)
    if words == 2:
        return threefry2x(ctr, key, width, rounds)
    if words == 4:
        return threefry4x(ctr, key, width, rounds)
    raise ValueError(f"Threefry counters hold 2 or 4 words, got {words}")


class Threefry:
    """A Threefry bijection with a fixed shape and round count.

    Calling the object maps a counter and a key, each a sequence of
    ``words`` unsigned ``width``-bit integers, to a tuple of the same shape.
    """

    __slots__ = ("words", "width", "rounds")

    def __init__(self, words: int = 4, width: int = 32, rounds: int = DEFAULT_ROUNDS):
        if words not in _MAX_ROUNDS:
            raise ValueError(f"Threefry works on 2 or 4 words, got {words!r}")
        rotation_schedule(words, width)
        limit = _MAX_ROUNDS[words]
        if not isinstance(rounds, int) or not 0 <= rounds <= limit:
            raise ValueError(
                f"Threefry{words}x{width} takes 0 to {limit} rounds, got {rounds!r}"
            )
        self.words = words
        self.width = width
        self.rounds = rounds

    def __call__(self, ctr: Sequence[int], key: Sequence[int]) -> tuple[int, ...]:
        if len(ctr) != self.words:
            raise ValueError(
                f"ctr must hold exactly {self.words} words, got {len(ctr)}"
            )
        if self.words == 2:
            return threefry2x(ctr, key, self.width, self.rounds)
        return threefry4x(ctr, key, self.width, self.rounds)

    @property
    def name(self) -> str:
        return f"Threefry{self.words}x{self.width}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Threefry):
            return NotImplemented
        return (self.words, self.width, self.rounds) == (
            other.words,
            other.width,
            other.rounds,
        )

    def __hash__(self) -> int:
        return hash((self.words, self.width, self.rounds))

    def __repr__(self) -> str:
        return f"Threefry(words={self.words}, width={self.width}, rounds={self.rounds})"