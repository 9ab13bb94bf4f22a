"""A conventional, stateful random number engine built on a counter-based generator.

The engine keeps a counter and a key, applies the generator to successive
counters and hands out the words of each result one at a time, last word
first.  The exposed state is the counter together with the number of words
of the current block that are still to be returned.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from cbrng123.aes import AESKey, AESNI1xm128i, AESNI4x32, AESOpenSSL16x8
from cbrng123.threefry import Threefry

_AES_ROUND_KEYS = 11


class Engine:
    """A stream of random words drawn from a counter-based generator.

    ``cbrng`` is a callable taking ``(ctr, key)`` with ``words`` and
    ``width`` attributes describing the counter shape; it defaults to
    four-word, 32-bit Threefry.  ``seed`` may be ``None`` (all-zero key),
    an integer (first key word), a sequence of key words, an
    :class:`AESKey` for AES generators, or a seed sequence: an object whose
    ``generate(count)`` method returns ``count`` 32-bit integers.
    """

    __slots__ = ("_cbrng", "_words", "_width", "_key", "_ctr", "_buffer", "_elem")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, cbrng: Any = None, seed: Any = None) -> None:
        if cbrng is None:
            cbrng = Threefry()
        try:
            words = int(cbrng.words)
            width = int(cbrng.width)
        except (AttributeError, TypeError, ValueError):
            raise TypeError(
                "cbrng must be a generator with 'words' and 'width' attributes"
            ) from None
        if not callable(cbrng):
            raise TypeError("cbrng must be callable as cbrng(ctr, key)")
        if words < 1 or width < 1:
            raise ValueError("cbrng must have at least one word of at least one bit")
        self._cbrng = cbrng
        self._words = words
        self._width = width
        self._reset(seed)

    # -- internal helpers -------------------------------------------------

    @property
    def _mask(self) -> int:
        return (1 << self._width) - 1

    def _uses_aes_key(self) -> bool:
        return isinstance(self._cbrng, (AESNI1xm128i, AESNI4x32, AESOpenSSL16x8))

    def _reset(self, seed: Any) -> None:
        self._key = self._key_from_seed(seed)
        self._ctr = (0,) * self._words
        self._buffer = (0,) * self._words
        self._elem = 0

    def _check_words(self, name: str, values: Sequence[int]) -> tuple[int, ...]:
        try:
            words = tuple(values)
        except TypeError:
            raise TypeError(f"{name} must be a sequence of integers") from None
        if len(words) != self._words:
            raise ValueError(
                f"{name} must hold exactly {self._words} words, got {len(words)}"
            )
        mask = self._mask
        for word in words:
            if not isinstance(word, int) or not 0 <= word <= mask:
                raise ValueError(
                    f"{name} word {word!r} does not fit in {self._width} bits"
                )
        return words

    def _key_from_ukey(self, ukey: tuple[int, ...]) -> Any:
        if isinstance(self._cbrng, AESNI4x32):
            return AESKey.from_words(ukey)
        if isinstance(self._cbrng, AESOpenSSL16x8):
            return AESKey.from_bytes(ukey)
        if isinstance(self._cbrng, AESNI1xm128i):
            return AESKey.from_bytes(ukey[0].to_bytes(16, "little"))
        return ukey

    def _key_from_seed(self, seed: Any) -> Any:
        if seed is None:
            return self._key_from_ukey((0,) * self._words)
        if isinstance(seed, AESKey):
            if not self._uses_aes_key():
                raise TypeError("an AESKey can only key an AES generator")
            return seed
        if isinstance(seed, int):
            if not 0 <= seed <= self._mask:
                raise ValueError(f"seed {seed!r} does not fit in {self._width} bits")
            return self._key_from_ukey((seed,) + (0,) * (self._words - 1))
        generate = getattr(seed, "generate", None)
        if callable(generate):
            return self._key_from_ukey(self._ukey_from_seed_sequence(generate))
        return self._key_from_ukey(self._check_words("seed", seed))

    def _ukey_from_seed_sequence(self, generate: Any) -> tuple[int, ...]:
        chunks_per_word = (self._width + 31) // 32
        values = [int(v) & 0xFFFFFFFF for v in generate(self._words * chunks_per_word)]
        if len(values) != self._words * chunks_per_word:
            raise ValueError("seed sequence returned the wrong number of values")
        mask = self._mask
        ukey = []
        for start in range(0, len(values), chunks_per_word):
            chunk = values[start : start + chunks_per_word]
            word = sum(v << (32 * j) for j, v in enumerate(chunk))
            ukey.append(word & mask)
        return tuple(ukey)

    def _coerce_key(self, key: Any) -> Any:
        if isinstance(key, AESKey):
            if not self._uses_aes_key():
                raise TypeError("an AESKey can only key an AES generator")
            return key
        return self._key_from_ukey(self._check_words("key", key))

    def _incr(self, ctr: tuple[int, ...], n: int) -> tuple[int, ...]:
        width = self._width
        value = sum(w << (width * i) for i, w in enumerate(ctr))
        value = (value + n) & ((1 << (width * self._words)) - 1)
        mask = self._mask
        return tuple((value >> (width * i)) & mask for i in range(self._words))

    def _block(self, ctr: tuple[int, ...]) -> tuple[int, ...]:
        return tuple(self._cbrng(ctr, self._key))

    def _fix_invariant(self) -> None:
        if self._elem != 0:
            self._buffer = self._block(self._ctr)

    # -- public interface -------------------------------------------------

    @property
    def cbrng(self) -> Any:
        """The underlying counter-based generator."""
        return self._cbrng

    @property
    def key(self) -> Any:
        """The key in use: a tuple of words, or an :class:`AESKey`."""
        return self._key

    def __call__(self) -> int:
        """Return the next random word."""
        if self._words == 1:
            self._ctr = self._incr(self._ctr, 1)
            return self._block(self._ctr)[0]
        if self._elem == 0:
            self._ctr = self._incr(self._ctr, 1)
            self._buffer = self._block(self._ctr)
            self._elem = self._words - 1
            return self._buffer[-1]
        self._elem -= 1
        return self._buffer[self._elem]

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Engine):
            return NotImplemented
        return (
            self._ctr == other._ctr
            and self._elem == other._elem
            and self._key == other._key
        )

    def _key_text(self) -> str:
        if isinstance(self._key, AESKey):
            return str(self._key)
        return " ".join(str(w) for w in self._key)

    def __str__(self) -> str:
        ctr_text = " ".join(str(w) for w in self._ctr)
        return f"{ctr_text} {self._key_text()} {self._elem}"

    def __repr__(self) -> str:
        return f"Engine({self._cbrng!r}, state={str(self)!r})"

    def copy(self) -> Engine:
        """Return an independent engine in the same state."""
        twin = Engine.__new__(Engine)
        twin._cbrng = self._cbrng
        twin._words = self._words
        twin._width = self._width
        twin._key = self._key
        twin._ctr = self._ctr
        twin._buffer = self._buffer
        twin._elem = self._elem
        return twin

    def seed(self, value: Any = None) -> None:
        """Reset the engine as if newly built with ``value`` as its seed."""
        self._reset(value)

    def discard(self, skip: int) -> None:
        """Advance the engine past ``skip`` words."""
        if not isinstance(skip, int) or skip < 0:
            raise ValueError(f"skip must be a non-negative integer, got {skip!r}")
        nelem = self._words
        sub = skip % nelem
        skip //= nelem
        elem = self._elem
        if elem < sub:
            elem += nelem
            skip += 1
        self._elem = elem - sub
        self._ctr = self._incr(self._ctr, skip)
        self._fix_invariant()

    def generate(self, ctr: Sequence[int]) -> tuple[int, ...]:
        """Apply the generator to ``ctr`` under the current key, without changing state."""
        return self._block(self._check_words("ctr", ctr))

    def set_key(self, key: Any) -> None:
        """Replace the key, keeping the counter (unlike :meth:`seed`)."""
        self._key = self._coerce_key(key)
        self._fix_invariant()

    def get_counter(self) -> tuple[tuple[int, ...], int]:
        """Return the counter and the number of words still pending from it."""
        return self._ctr, self._elem

    def set_counter(self, ctr: Sequence[int], elem: int = 0) -> None:
        """Restore a state returned by :meth:`get_counter`."""
        if not isinstance(elem, int) or not 0 <= elem < self._words:
            raise ValueError(
                f"elem must be between 0 and {self._words - 1}, got {elem!r}"
            )
        self._ctr = self._check_words("ctr", ctr)
        self._elem = elem
        self._fix_invariant()

    def load_state(self, text: str) -> None:
        """Restore a state written by ``str(engine)``."""
        tokens = text.split()
        key_count = _AES_ROUND_KEYS if self._uses_aes_key() else self._words
        expected = 2 * 0 + self._words + key_count + 1
        if len(tokens) != expected:
            raise ValueError(f"engine state needs {expected} fields, got {len(tokens)}")
        try:
            ctr_words = [int(t) for t in tokens[: self._words]]
            key_tokens = tokens[self._words : self._words + key_count]
            elem = int(tokens[-1])
            if self._uses_aes_key():
                key: Any = AESKey(tuple(bytes.fromhex(t) for t in key_tokens))
            else:
                key = self._check_words("key", [int(t) for t in key_tokens])
        except ValueError as exc:
            raise ValueError(f"malformed engine state: {exc}") from None
        ctr = self._check_words("ctr", ctr_words)
        if not 0 <= elem < self._words:
            raise ValueError(
                f"elem must be between 0 and {self._words - 1}, got {elem!r}"
            )
        self._ctr = ctr
        self._key = key
        self._elem = elem
        self._fix_invariant()

    def min(self) -> int:
        """The smallest value the engine returns."""
        return 0

    def max(self) -> int:
        """The largest value the engine returns."""
        return self._mask