import pytest

from cbrng123.threefry2x import threefry2x, threefry2x32, threefry2x64


def test_threefry2x32_zero_known_answer():
    assert threefry2x32((0, 0), (0, 0), 20) == (0x6B200159, 0x99BA4EFE)


def test_threefry2x64_zero_known_answer():
    assert threefry2x64((0, 0), (0, 0), 20) == (
        0xC2B6E3A8C2C69865,
        0x6F81ED42F350084D,
    )


def test_default_rounds_is_twenty():
    ctr, key = (5, 9), (123, 456)
    assert threefry2x32(ctr, key) == threefry2x32(ctr, key, 20)
    assert threefry2x64(ctr, key) == threefry2x64(ctr, key, 20)


@pytest.mark.parametrize("width", [32, 64])
def test_named_variants_match_generic(width):
    fn = threefry2x32 if width == 32 else threefry2x64
    for rounds in (0, 4, 13, 20, 32):
        assert fn((7, 11), (3, 1), rounds) == threefry2x((7, 11), (3, 1), width, rounds)


@pytest.mark.parametrize("width", [32, 64])
def test_zero_rounds_adds_key(width):
    mask = (1 << width) - 1
    ctr = (mask, 3)
    key = (2, 4)
    assert threefry2x(ctr, key, width, 0) == ((mask + 2) & mask, 7)


@pytest.mark.parametrize("width", [32, 64])
def test_output_fits_width(width):
    mask = (1 << width) - 1
    for i in range(50):
        out = threefry2x((i, mask - i), (mask, i), width, 20)
        assert all(0 <= w <= mask for w in out)


@pytest.mark.parametrize("width", [32, 64])
def test_distinct_counters_give_distinct_outputs(width):
    outputs = {threefry2x((i, 0), (42, 0), width, 20) for i in range(500)}
    assert len(outputs) == 500


def test_key_changes_output():
    assert threefry2x32((1, 0), (0, 0)) != threefry2x32((1, 0), (1, 0))
    assert threefry2x64((1, 0), (0, 0)) != threefry2x64((1, 0), (1, 0))


def test_rounds_change_output():
    results = {threefry2x32((1, 2), (3, 4), r) for r in range(33)}
    assert len(results) == 33


def test_accepts_lists():
    assert threefry2x32([1, 2], [3, 4]) == threefry2x32((1, 2), (3, 4))


@pytest.mark.parametrize("rounds", [-1, 33, 72])
def test_rounds_out_of_range(rounds):
    with pytest.raises(ValueError):
        threefry2x32((0, 0), (0, 0), rounds)


def test_bad_width():
    with pytest.raises(ValueError):
        threefry2x((0, 0), (0, 0), 16, 20)


@pytest.mark.parametrize("ctr", [(0,), (0, 0, 0), ()])
def test_wrong_counter_length(ctr):
    with pytest.raises(ValueError):
        threefry2x32(ctr, (0, 0))


def test_wrong_key_length():
    with pytest.raises(ValueError):
        threefry2x64((0, 0), (0, 0, 0, 0))


def test_word_out_of_range():
    with pytest.raises(ValueError):
        threefry2x32((1 << 32, 0), (0, 0))
    with pytest.raises(ValueError):
        threefry2x64((0, 0), (-1, 0))