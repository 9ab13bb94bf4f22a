# cbrng123

Counter-based random number generators for Python.

A counter-based generator is a keyed bijection: give it a counter and a
key, and it returns a block of pseudo-random words. There is no hidden
state to carry around. Any counter can be evaluated in any order, which
makes it easy to give every task, particle or grid cell its own
reproducible stream by choosing a distinct counter or key.

The package provides:

- `cbrng123.threefry` and `cbrng123.threefry2x`: **Threefry** in the
  2- and 4-word layouts, with 32- or 64-bit words and a configurable
  number of rounds (20 by default).
- `cbrng123.aes`: generators built on the full AES-128 block cipher and
  key schedule, in 128-bit, 4×32-bit and 16×8-bit views.
- `cbrng123.engine`: `Engine`, a wrapper that turns any of these
  bijections into an ordinary sequential generator with seeding,
  `discard`, state save and restore, and iteration.
- `cbrng123.rotations`: the bit rotation, key-schedule parity and
  rotation constants Threefry uses.
- `cbrng123.demo`: a small demonstration command.

The package has no runtime dependencies.

## Installation

```
pip install cbrng123
```

## Calling a bijection directly

```python
from cbrng123.threefry import threefry4x32, threefry2x64, threefry, Threefry

# Functional form: counter words, key words, number of rounds.
out = threefry4x32([0, 0, 0, 0], [1234, 5678, 0, 0], 20)

# Object form: choose the layout once, then call it with counter and key.
gen = Threefry(4, 32, 20)
out = gen([0, 0, 0, 0], [1234, 5678, 0, 0])

# 2x64 variant.
out = threefry2x64([7, 0], [42, 0], 20)

# Layout chosen by the counter's length (2 or 4 words).
out = threefry([7, 0], [42, 0], 64)
```

Every word must fit in the chosen width; a wrong word count, an
out-of-range word or an unsupported width raises `ValueError`. Two-word
generators accept 0 to 32 rounds and four-word generators 0 to 72.
`threefry2x`, `threefry2x32` and `threefry2x64` in `cbrng123.threefry2x`
cover the two-word layout on their own.

The same counter and key always give the same output, so a simulation
that derives its counter from, say, a particle index and a time step
produces identical numbers no matter how the work is split up.

## AES-based generators

```python
from cbrng123.aes import AESKey, AESNI4x32, aesni4x32

key = AESKey.from_words([1, 2, 3, 4])
out = aesni4x32([0, 0, 0, 0], key)

gen = AESNI4x32()
out = gen([0, 0, 0, 0], key)
```

Expanding a key into its round keys costs more than encrypting one
block, so build the `AESKey` once and reuse it. The functions also
accept a plain user key and expand it on each call.

- `aesni4x32` / `AESNI4x32`: four 32-bit words, key from
  `AESKey.from_words`.
- `aesni1xm128i` / `AESNI1xm128i`: one 128-bit word, laid out
  little-endian.
- `aesopenssl16x8` / `AESOpenSSL16x8`: sixteen bytes, key from
  `AESKey.from_bytes`.

`expand_key` and `encrypt_block` give access to the cipher itself.

## A sequential engine

When code expects a plain "next random number" interface, wrap a
bijection in an `Engine`:

```python
from cbrng123.engine import Engine
from cbrng123.threefry import Threefry

eng = Engine(Threefry(4, 32, 20), 55)

first = eng()          # one word at a time, last word of each block first
eng.discard(1000)      # skip ahead cheaply
saved = str(eng)       # textual state: counter, key, pending word count

other = Engine(Threefry(4, 32, 20), 0)
other.load_state(saved)
assert other == eng
```

With no generator given, `Engine()` uses four-word, 32-bit Threefry.
The seed may be `None` (all-zero key), an integer (the first key word),
a sequence of key words, an `AESKey` for the AES generators, or a seed
sequence: any object whose `generate(count)` method returns `count`
32-bit integers.

The engine also offers `seed`, `copy`, `set_key` (which keeps the
counter), `get_counter`, `set_counter`, `generate` (run the bijection on
an explicit counter with the engine's key, without changing state),
`min` and `max`, and it can be iterated. `set_counter` raises
`ValueError` if the word index is outside the block.

## Demonstration

```
cbrng123-demo simple --seed 1 --key2 2 --count 10
cbrng123-demo simplepp --seed 1 --count 10
cbrng123-demo pi --seed 0 --tries 100000
```

`simple` prints the first outputs of Threefry4x32 for the key
`(seed, key2, 0, 0)`, and `simplepp` those of Threefry2x64 for the key
`(seed, 0)`. `pi` throws darts drawn from Threefry2x64 at the unit
square, estimates π from the share that land inside the quarter circle,
and reports how far the hit count is from what is expected; it exits
with status 1 if the count is more than three standard deviations off.
Every option has a default, but a subcommand must be given.

The same checks can be run from code with `pi_check` (which returns a
`PiCheck` holding the estimate, `chisq`, `ok` and a printable report),
`simple_lines` and `simplepp_lines` in `cbrng123.demo`.

## What the package does not do

The generators and the engine return unsigned integer words only. There
are no helpers for turning them into floating-point values or for
sampling from distributions; the `pi` demonstration does its own simple
scaling. Only the Threefry and AES families are included.

## Not for cryptography

Threefry and the engine are statistical generators for simulation and
sampling. They are not meant for keys, tokens or anything else that has
to resist an attacker.

## Running the tests

```
pip install cbrng123[test]
pytest
```