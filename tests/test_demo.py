import pytest

from cbrng123.demo import PiCheck, main, pi_check, simple_lines, simplepp_lines
from cbrng123.threefry import threefry4x32
from cbrng123.threefry2x import threefry2x64


def test_pi_check_report_first_line():
    result = pi_check(3, 4)
    assert result.lines()[0] == (
        "3 out of 4 darts thrown at a square board hit the inscribed circle"
    )
    assert result.estimate == 3.0


def test_pi_check_near_expectation_is_ok():
    result = pi_check(7854, 10000)
    assert result.chisq < 1.0
    assert result.ok
    assert "less than one 'sigma'" in result.verdict


def test_pi_check_one_to_two_sigma():
    result = pi_check(7914, 10000)
    assert 1.0 <= result.chisq < 4.0
    assert result.ok
    assert "between one and two" in result.verdict


def test_pi_check_two_to_three_sigma():
    result = pi_check(7954, 10000)
    assert 4.0 <= result.chisq < 9.0
    assert result.ok
    assert result.verdict.startswith("Maybe OK")


def test_pi_check_far_off_fails():
    result = pi_check(10000, 10000)
    assert result.chisq >= 9.0
    assert not result.ok
    assert result.verdict.startswith("May not be OK")
    assert str(result).splitlines()[-1].startswith("(chisquared = ")


def test_pi_check_rejects_zero_tries():
    with pytest.raises(ValueError):
        pi_check(0, 0)


def test_pi_check_rejects_too_many_hits():
    with pytest.raises(ValueError):
        PiCheck(5, 4)


def test_simple_lines_match_generator():
    lines = simple_lines(0x1234, 7, 5)
    assert len(lines) == 6
    assert lines[0] == "The first few randoms with key 0x1234 0x7"
    for i, line in enumerate(lines[1:]):
        prefix, rest = line.split(" threefry4x32(20, ctr, key): ")
        assert prefix == f"ctr: {i:x} 0"
        words = tuple(int(w, 16) for w in rest.split())
        assert words == threefry4x32((i, 0, 0, 0), (0x1234, 7, 0, 0))[:2]


def test_simple_lines_rejects_wide_seed():
    with pytest.raises(ValueError):
        simple_lines(1 << 32, 0, 1)


def test_simplepp_lines_match_generator():
    lines = simplepp_lines(0xABCDEF, 4)
    assert len(lines) == 5
    assert lines[0] == (
        "The first few 2x64 randoms from Threefry2x64 with hex key abcdef 0"
    )
    for i, line in enumerate(lines[1:]):
        prefix, rest = line.split(" Threefry2x64<>(ctr, key): ")
        assert prefix == f"ctr: {i:x} 0"
        words = tuple(int(w, 16) for w in rest.split())
        assert words == threefry2x64((i, 0), (0xABCDEF, 0))


def test_simplepp_lines_rejects_negative_count():
    with pytest.raises(ValueError):
        simplepp_lines(1, -1)


def test_main_simple_prints_lines(capsys):
    status = main(["simple", "--seed", "5", "--count", "3"])
    out = capsys.readouterr().out
    assert status == 0
    assert out.splitlines() == simple_lines(5, 0, 3)


def test_main_simplepp_prints_lines(capsys):
    status = main(["simplepp", "--seed", "9", "--count", "2"])
    out = capsys.readouterr().out
    assert status == 0
    assert out.splitlines() == simplepp_lines(9, 2)


def test_main_pi_reports_consistent_status(capsys):
    status = main(["pi", "--seed", "3", "--tries", "2000"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].endswith("out of 2000 darts thrown at a square board hit the inscribed circle")
    hits = int(lines[0].split()[0])
    assert 0 <= hits <= 2000
    assert status == (0 if pi_check(hits, 2000).ok else 1)


def test_main_rejects_unknown_command():
    with pytest.raises(SystemExit):
        main(["bogus"])