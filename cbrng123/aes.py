"""AES-128 block cipher used as a counter-based random number generator.

Three counter shapes share one cipher: a single 128-bit word (``1xm128i``),
four 32-bit words (``4x32``) and sixteen bytes (``16x8``).  Words are laid
out little-endian, so word ``i`` of a 4x32 counter occupies bytes
``4*i`` to ``4*i+3`` of the cipher block and a 128-bit word occupies the
block with its least significant byte first.
"""

from __future__ import annotations

import struct
from collections.abc import Sequence
from dataclasses import dataclass, field

ROUNDS = 10
BLOCK_BYTES = 16

_RCON = (0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1B, 0x36)


def _xtime(a: int) -> int:
    a <<= 1
    return (a ^ 0x11B) if a & 0x100 else a


def _gmul(a: int, b: int) -> int:
    product = 0
    while b:
        if b & 1:
            product ^= a
        a = _xtime(a)
        b >>= 1
    return product


def _ginverse(a: int) -> int:
    # a**254 is the multiplicative inverse in GF(2^8); 0 maps to 0.
    result, base, exp = 1, a, 254
    while exp:
        if exp & 1:
            result = _gmul(result, base)
        base = _gmul(base, base)
        exp >>= 1
    return result if a else 0


def _rotl8(x: int, n: int) -> int:
    return ((x << n) | (x >> (8 - n))) & 0xFF


def _build_sbox() -> bytes:
    table = bytearray(256)
    for value in range(256):
        b = _ginverse(value)
        table[value] = (
            b ^ _rotl8(b, 1) ^ _rotl8(b, 2) ^ _rotl8(b, 3) ^ _rotl8(b, 4) ^ 0x63
        )
    return bytes(table)


_SBOX = _build_sbox()
_MUL2 = bytes(_xtime(a) & 0xFF for a in range(256))


def _as_block(name: str, data: bytes | bytearray | Sequence[int]) -> bytes:
    try:
        block = bytes(data)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be {BLOCK_BYTES} byte values") from None
    if len(block) != BLOCK_BYTES:
        raise ValueError(f"{name} must hold exactly {BLOCK_BYTES} bytes, got {len(block)}")
    return block


def _words_to_block(name: str, words: Sequence[int]) -> bytes:
    values = list(words)
    if len(values) != 4:
        raise ValueError(f"{name} must hold exactly 4 words, got {len(values)}")
    for word in values:
        if not isinstance(word, int) or not 0 <= word <= 0xFFFFFFFF:
            raise ValueError(f"{name} word {word!r} does not fit in 32 bits")
    return struct.pack("<4I", *values)


def _m128_to_block(name: str, words: Sequence[int]) -> bytes:
    values = list(words)
    if len(values) != 1:
        raise ValueError(f"{name} must hold exactly 1 word, got {len(values)}")
    (word,) = values
    if not isinstance(word, int) or not 0 <= word < 1 << 128:
        raise ValueError(f"{name} word {word!r} does not fit in 128 bits")
    return word.to_bytes(BLOCK_BYTES, "little")


def expand_key(ukey: bytes | bytearray | Sequence[int]) -> tuple[bytes, ...]:
    """Expand a 16-byte AES-128 user key into its 11 round keys."""
    key = _as_block("ukey", ukey)
    words = [key[i : i + 4] for i in range(0, BLOCK_BYTES, 4)]
    for i in range(4, 4 * (ROUNDS + 1)):
        temp = words[i - 1]
        if i % 4 == 0:
            temp = bytes(_SBOX[b] for b in temp[1:] + temp[:1])
            temp = bytes((temp[0] ^ _RCON[i // 4 - 1],)) + temp[1:]
        words.append(bytes(a ^ b for a, b in zip(words[i - 4], temp)))
    return tuple(b"".join(words[r : r + 4]) for r in range(0, len(words), 4))


def _zero_key_schedule() -> tuple[bytes, ...]:
    return expand_key(bytes(BLOCK_BYTES))


@dataclass(frozen=True)
class AESKey:
    """An expanded AES-128 key: the 11 round keys, 16 bytes each.

    The default key is the expansion of the all-zero user key.
    """

    round_keys: tuple[bytes, ...] = field(default_factory=_zero_key_schedule)

    def __post_init__(self) -> None:
        keys = tuple(bytes(k) for k in self.round_keys)
        if len(keys) != ROUNDS + 1 or any(len(k) != BLOCK_BYTES for k in keys):
            raise ValueError(
                f"an AES key schedule holds {ROUNDS + 1} round keys of {BLOCK_BYTES} bytes"
            )
        object.__setattr__(self, "round_keys", keys)

    @classmethod
    def from_words(cls, ukey: Sequence[int]) -> AESKey:
        """Expand a user key given as four 32-bit words."""
        return cls(expand_key(_words_to_block("ukey", ukey)))

    @classmethod
    def from_bytes(cls, ukey: bytes | bytearray | Sequence[int]) -> AESKey:
        """Expand a user key given as sixteen bytes."""
        return cls(expand_key(ukey))

    def __str__(self) -> str:
        return " ".join(k.hex() for k in self.round_keys)


def _add_round_key(state: bytearray, round_key: bytes) -> None:
    for i, k in enumerate(round_key):
        state[i] ^= k


def _sub_shift(state: bytearray) -> bytearray:
    # SubBytes followed by ShiftRows; byte index is row + 4 * column.
    return bytearray(
        _SBOX[state[row + 4 * ((col + row) % 4)]]
        for col in range(4)
        for row in range(4)
    )


def _mix_columns(state: bytearray) -> None:
    for c in range(0, BLOCK_BYTES, 4):
        a0, a1, a2, a3 = state[c : c + 4]
        total = a0 ^ a1 ^ a2 ^ a3
        state[c] = a0 ^ total ^ _MUL2[a0 ^ a1]
        state[c + 1] = a1 ^ total ^ _MUL2[a1 ^ a2]
        state[c + 2] = a2 ^ total ^ _MUL2[a2 ^ a3]
        state[c + 3] = a3 ^ total ^ _MUL2[a3 ^ a0]


def _coerce_key(key: AESKey | bytes | bytearray | Sequence[int]) -> AESKey:
    if isinstance(key, AESKey):
        return key
    return AESKey.from_bytes(key)


def encrypt_block(
    block: bytes | bytearray | Sequence[int],
    key: AESKey | bytes | bytearray | Sequence[int],
) -> bytes:
    """Encrypt one 16-byte block with AES-128.

    ``key`` is an :class:`AESKey` or a 16-byte user key to be expanded.
    """
    state = bytearray(_as_block("block", block))
    round_keys = _coerce_key(key).round_keys
    _add_round_key(state, round_keys[0])
    for round_key in round_keys[1:ROUNDS]:
        state = _sub_shift(state)
        _mix_columns(state)
        _add_round_key(state, round_key)
    state = _sub_shift(state)
    _add_round_key(state, round_keys[ROUNDS])
    return bytes(state)


def aesni1xm128i(ctr: Sequence[int], key: AESKey | Sequence[int]) -> tuple[int]:
    """AES on a counter holding one 128-bit word.

    ``key`` is an :class:`AESKey` or a user key of one 128-bit word.
    """
    block = _m128_to_block("ctr", ctr)
    if not isinstance(key, AESKey):
        key = AESKey.from_bytes(_m128_to_block("ukey", key))
    return (int.from_bytes(encrypt_block(block, key), "little"),)


def aesni4x32(
    ctr: Sequence[int], key: AESKey | Sequence[int]
) -> tuple[int, int, int, int]:
    """AES on a counter of four 32-bit words.

    ``key`` is an :class:`AESKey` or a user key of four 32-bit words.
    """
    block = _words_to_block("ctr", ctr)
    if not isinstance(key, AESKey):
        key = AESKey.from_words(key)
    return struct.unpack("<4I", encrypt_block(block, key))


def aesopenssl16x8(
    ctr: bytes | bytearray | Sequence[int],
    key: AESKey | bytes | bytearray | Sequence[int],
) -> tuple[int, ...]:
    """AES on a counter of sixteen bytes.

    ``key`` is an :class:`AESKey` or a sixteen-byte user key.
    """
    return tuple(encrypt_block(ctr, key))


class AESNI1xm128i:
    """AES generator over one 128-bit counter word."""

    rounds = ROUNDS
    words = 1
    width = 128

    def __call__(self, ctr: Sequence[int], key: AESKey | Sequence[int]) -> tuple[int]:
        return aesni1xm128i(ctr, key)


class AESNI4x32:
    """AES generator over four 32-bit counter words."""

    rounds = ROUNDS
    words = 4
    width = 32

    def __call__(
        self, ctr: Sequence[int], key: AESKey | Sequence[int]
    ) -> tuple[int, int, int, int]:
        return aesni4x32(ctr, key)


class AESOpenSSL16x8:
    """AES generator over sixteen counter bytes."""

    rounds = ROUNDS
    words = 16
    width = 8

    def __call__(
        self,
        ctr: bytes | bytearray | Sequence[int],
        key: AESKey | bytes | bytearray | Sequence[int],
    ) -> tuple[int, ...]:
        return aesopenssl16x8(ctr, key)