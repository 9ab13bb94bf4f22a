import pytest

from cbrng123.threefry import (
    Threefry,
    threefry,
    threefry4x,
    threefry4x32,
    threefry4x64,
)
from cbrng123.threefry2x import threefry2x64

MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1


def test_threefry4x32_known_answer_from_engine_test():
    # The engine's 1001st output for a zero key is the last word of block 251.
    out = threefry4x32((251, 0, 0, 0), (0, 0, 0, 0))
    assert out[3] == 874101813


def test_threefry_class_2x64_known_answer_from_engine_test():
    gen = Threefry(2, 64)
    out = gen((501, 0), (0, 0))
    assert out[1] == 17578122881062615727


def test_zero_rounds_is_key_addition():
    ctr = (MASK32, 1, 2, 3)
    key = (1, 2, 3, MASK32)
    assert threefry4x32(ctr, key, 0) == (0, 3, 5, 2)


def test_zero_rounds_64_bit_wraps():
    ctr = (MASK64, 0, 0, 7)
    key = (2, 0, 0, 1)
    assert threefry4x64(ctr, key, 0) == (1, 0, 0, 8)


def test_default_rounds_is_twenty():
    ctr = (1, 2, 3, 4)
    key = (5, 6, 7, 8)
    assert threefry4x32(ctr, key) == threefry4x32(ctr, key, 20)
    assert threefry4x64(ctr, key) == threefry4x(ctr, key, 64, 20)


def test_outputs_fit_width_and_differ_by_counter():
    key = (11, 22, 33, 44)
    outs = {threefry4x32((i, 0, 0, 0), key) for i in range(50)}
    assert len(outs) == 50
    for out in outs:
        assert all(0 <= w <= MASK32 for w in out)


def test_rounds_change_output():
    ctr = (1, 0, 0, 0)
    key = (0, 0, 0, 0)
    results = {threefry4x64(ctr, key, r) for r in (12, 13, 20, 72)}
    assert len(results) == 4


def test_generic_dispatch_matches_specific_functions():
    assert threefry((3, 4), (5, 6), 64, 13) == threefry2x64((3, 4), (5, 6), 13)
    assert threefry((3, 4, 5, 6), (7, 8, 9, 10), 32, 12) == threefry4x32(
        (3, 4, 5, 6), (7, 8, 9, 10), 12
    )


def test_generic_rejects_other_lengths():
    with pytest.raises(ValueError):
        threefry((1, 2, 3), (1, 2, 3), 32)


@pytest.mark.parametrize("rounds", [-1, 73])
def test_rounds_out_of_range(rounds):
    with pytest.raises(ValueError):
        threefry4x32((0, 0, 0, 0), (0, 0, 0, 0), rounds)


def test_max_rounds_accepted():
    out = threefry4x64((0, 0, 0, 0), (0, 0, 0, 0), 72)
    assert len(out) == 4 and out != threefry4x64((0, 0, 0, 0), (0, 0, 0, 0), 71)


def test_word_too_large_rejected():
    with pytest.raises(ValueError):
        threefry4x32((1 << 32, 0, 0, 0), (0, 0, 0, 0))
    with pytest.raises(ValueError):
        threefry4x32((0, 0, 0, 0), (0, 0, 0, -1))


def test_wrong_key_length_rejected():
    with pytest.raises(ValueError):
        threefry4x32((0, 0, 0, 0), (0, 0))


def test_bad_width_rejected():
    with pytest.raises(ValueError):
        threefry4x((0, 0, 0, 0), (0, 0, 0, 0), 16)


def test_class_matches_function_and_equality():
    gen = Threefry(4, 32, 12)
    assert gen((9, 8, 7, 6), (1, 2, 3, 4)) == threefry4x32((9, 8, 7, 6), (1, 2, 3, 4), 12)
    assert gen == Threefry(4, 32, 12)
    assert gen != Threefry(4, 32, 20)
    assert gen.name == "Threefry4x32"


@pytest.mark.parametrize(
    "words, width, rounds",
    [(3, 32, 20), (4, 16, 20), (2, 64, 33), (4, 64, 73), (2, 32, -1)],
)
def test_class_rejects_bad_configuration(words, width, rounds):
    with pytest.raises(ValueError):
        Threefry(words, width, rounds)


def test_class_rejects_wrong_counter_length():
    gen = Threefry(2, 32)
    with pytest.raises(ValueError):
        gen((0, 0, 0, 0), (0, 0))