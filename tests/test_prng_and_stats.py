import pytest

from risk_engine.simulator import Mulberry32, max_drawdown, percentile


def test_same_seed_same_stream():
    first = Mulberry32(555)
    second = Mulberry32(555)
    assert [first() for _ in range(10000)] == [second() for _ in range(10000)]


def test_interleaved_streams_match_independent_streams():
    first = Mulberry32(7)
    second = Mulberry32(8)
    interleaved = [(first(), second()) for _ in range(100)]
    alone_first = Mulberry32(7)
    alone_second = Mulberry32(8)
    assert [pair[0] for pair in interleaved] == [alone_first() for _ in range(100)]
    assert [pair[1] for pair in interleaved] == [alone_second() for _ in range(100)]


def test_different_seeds_diverge():
    first = Mulberry32(42)
    second = Mulberry32(43)
    assert [first() for _ in range(20)] != [second() for _ in range(20)]


def test_negative_and_large_seeds_wrap_to_32_bits():
    assert [Mulberry32(-1)() for _ in range(3)] == [Mulberry32(0xFFFFFFFF)() for _ in range(3)]
    assert Mulberry32(2**32 + 5)() == Mulberry32(5)()


def test_draws_are_uniform():
    rng = Mulberry32(777)
    draws = [rng() for _ in range(10000)]
    assert all(0.0 <= value < 1.0 for value in draws)

    bins = [0] * 10
    for value in draws:
        bins[int(value * 10)] += 1
    expected = len(draws) / 10
    chi_square = sum((count - expected) ** 2 / expected for count in bins)
    assert chi_square < 27.88

    mean = sum(draws) / len(draws)
    numerator = sum((a - mean) * (b - mean) for a, b in zip(draws, draws[1:]))
    denominator = sum((value - mean) ** 2 for value in draws)
    assert abs(numerator / denominator) < 0.05


def test_percentile_laws():
    sample = [5.0, 1.0, 9.0, 3.0, 7.0]
    assert percentile(sample, 0) == min(sample)
    assert percentile(sample, 1) == max(sample)
    assert percentile(sample, 0.5) == 5.0
    assert percentile([1.0, 2.0, 3.0, 4.0], 0.5) == pytest.approx(2.5)
    values = [percentile(sample, p / 20) for p in range(21)]
    assert values == sorted(values)
    assert sample == [5.0, 1.0, 9.0, 3.0, 7.0]


@pytest.mark.parametrize("p", [0.0, 0.25, 1.0])
def test_percentile_of_empty_sample_is_zero(p):
    assert percentile([], p) == 0.0


def test_max_drawdown():
    assert max_drawdown([100.0, 120.0, 60.0, 130.0]) == pytest.approx(0.5)
    assert max_drawdown([1.0, 2.0, 3.0]) == 0.0
    assert max_drawdown([]) == 0.0


def test_stream_matches_reference_mulberry32():
    rng = Mulberry32(555)
    assert [rng() for _ in range(5)] == [
        0.42840443295426667,
        0.12306868424639106,
        0.4752555259037763,
        0.006728416541591287,
        0.43989732349291444,
    ]
