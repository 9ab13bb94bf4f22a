"""Small demonstrations: a pi estimate check and first outputs of Threefry."""

from __future__ import annotations

import argparse
import math
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from cbrng123.threefry import Threefry, threefry4x32

_PI = 3.14159265358979323846
_QUARTER = _PI / 4.0


@dataclass(frozen=True)
class PiCheck:
    """The outcome of comparing a dart-throwing pi estimate with expectation.

    ``hits`` darts out of ``tries`` landed inside the inscribed circle.
    ``chisq`` measures how far ``hits`` lies from its expected value in
    units of the variance; the result is acceptable below nine.
    """

    hits: int
    tries: int

    def __post_init__(self) -> None:
        if self.tries <= 0:
            raise ValueError(f"tries must be positive, got {self.tries!r}")
        if not 0 <= self.hits <= self.tries:
            raise ValueError(
                f"hits must be between 0 and {self.tries}, got {self.hits!r}"
            )

    @property
    def estimate(self) -> float:
        return 4.0 * self.hits / self.tries

    @property
    def diff_percent(self) -> float:
        return (self.estimate - _PI) * 100.0 / _PI

    @property
    def chisq(self) -> float:
        mean = self.tries * _QUARTER
        var = self.tries * _QUARTER * (1.0 - _QUARTER)
        delta = self.hits - mean
        return delta * delta / var

    @property
    def ok(self) -> bool:
        return self.chisq < 9.0

    @property
    def verdict(self) -> str:
        chisq = self.chisq
        if chisq < 1.0:
            return "OK, # of hits is less than one 'sigma' away from expectation"
        if chisq < 4.0:
            return "OK, # of hits is between one and two 'sigma' away from expectation"
        if chisq < 9.0:
            return (
                "Maybe OK, # of hits is between two and three 'sigma' "
                "away from expectation"
            )
        return (
            "May not be OK, # of hits is more than three 'sigma'.  "
            "Worth looking into."
        )

    def lines(self) -> list[str]:
        """The report, one line per entry."""
        return [
            f"{self.hits} out of {self.tries} darts thrown at a square board "
            "hit the inscribed circle",
            "pi is approximately %.8g (diff = %.2g %%)"
            % (self.estimate, self.diff_percent),
            self.verdict,
            "(chisquared = %.2g)" % self.chisq,
        ]

    def __str__(self) -> str:
        return "\n".join(self.lines())


def pi_check(hits: int, tries: int) -> PiCheck:
    """Judge ``hits`` out of ``tries`` darts against the expected pi/4 ratio."""
    return PiCheck(hits, tries)


def simple_lines(seed: int, key2: int = 0, count: int = 10) -> list[str]:
    """First ``count`` outputs of Threefry4x32 with key ``(seed, key2, 0, 0)``."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count!r}")
    key = (seed, key2, 0, 0)
    lines = [f"The first few randoms with key 0x{key[0]:x} 0x{key[1]:x}"]
    for i in range(count):
        ctr = (i, 0, 0, 0)
        rand = threefry4x32(ctr, key)
        lines.append(
            f"ctr: {ctr[0]:x} {ctr[1]:x} threefry4x32(20, ctr, key): "
            f"{rand[0]:x} {rand[1]:x}"
        )
    return lines


def _hex_words(words: Sequence[int]) -> str:
    return " ".join(f"{w:x}" for w in words)


def simplepp_lines(seed: int, count: int = 10) -> list[str]:
    """First ``count`` outputs of Threefry2x64 with key ``(seed, 0)``."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count!r}")
    generator = Threefry(2, 64)
    key = (seed, 0)
    generator((0, 0), key)  # validates the seed before any output
    lines = [
        "The first few 2x64 randoms from Threefry2x64 with hex key "
        + _hex_words(key)
    ]
    for i in range(count):
        ctr = (i, 0)
        rand = generator(ctr, key)
        lines.append(
            f"ctr: {_hex_words(ctr)} Threefry2x64<>(ctr, key): {_hex_words(rand)}"
        )
    return lines


def _throw_darts(seed: int, tries: int) -> int:
    """Count darts from Threefry2x64 landing inside the unit quarter circle."""
    generator = Threefry(2, 64)
    key = (seed, 0)
    scale = 1.0 / float(1 << 64)
    hits = 0
    for n in range(1, tries + 1):
        a, b = generator((n, 0), key)
        x = (a + 0.5) * scale
        y = (b + 0.5) * scale
        if x * x + y * y < 1.0:
            hits += 1
    return hits


def main(argv: Sequence[str] | None = None) -> int:
    """Run one of the demonstrations and return the exit status."""
    parser = argparse.ArgumentParser(
        prog="cbrng123-demo", description="Counter-based generator demonstrations."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_simple = sub.add_parser("simple", help="first outputs of Threefry4x32")
    p_simple.add_argument("--seed", type=int, default=0)
    p_simple.add_argument("--key2", type=int, default=0)
    p_simple.add_argument("--count", type=int, default=10)

    p_pp = sub.add_parser("simplepp", help="first outputs of Threefry2x64")
    p_pp.add_argument("--seed", type=int, default=0)
    p_pp.add_argument("--count", type=int, default=10)

    p_pi = sub.add_parser("pi", help="estimate pi by throwing darts")
    p_pi.add_argument("--seed", type=int, default=0)
    p_pi.add_argument("--tries", type=int, default=100000)

    args = parser.parse_args(argv)
    try:
        if args.command == "simple":
            lines = simple_lines(args.seed, args.key2, args.count)
            status = 0
        elif args.command == "simplepp":
            lines = simplepp_lines(args.seed, args.count)
            status = 0
        else:
            if args.tries <= 0:
                parser.error("--tries must be positive")
            result = pi_check(_throw_darts(args.seed, args.tries), args.tries)
            lines = result.lines()
            status = 0 if result.ok else 1
    except ValueError as exc:
        parser.error(str(exc))
    for line in lines:
        print(line)
    return status


if __name__ == "__main__":
    sys.exit(main())