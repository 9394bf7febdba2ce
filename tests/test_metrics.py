import math

import pytest

from risk_engine.config import MetricsConfig
from risk_engine.risk import ModelPhase, SizingModel
from risk_engine.simulator import CancelToken, SimulationCancelled, compute_heavy_metrics

SMALL = MetricsConfig(path_count=60, step_count=20, survival_path_count=300)


def test_heavy_metrics_are_deterministic():
    first = compute_heavy_metrics(87500, 60, 1.5, config=SMALL)
    second = compute_heavy_metrics(87500, 60, 1.5, config=SMALL)
    assert first == second


def test_default_run_is_deterministic():
    assert compute_heavy_metrics(150000, 55, 1.5) == compute_heavy_metrics(150000, 55, 1.5)


def test_result_shape():
    result = compute_heavy_metrics(87500, 60, 1.5, config=SMALL)

    assert [point.step for point in result.trajectory] == list(range(0, 21, 2))
    assert result.trajectory[0].primary_median == pytest.approx(math.log10(87500))
    assert set(result.terminal) == set(SizingModel)
    assert set(result.drawdown) == {SizingModel.POWER_DECAY, SizingModel.FIXED_FRACTION}
    assert len(result.full_map) == len(SMALL.reference_levels)
    assert len(result.recovery) == 6
    assert 0.0 <= result.survival_pct <= 100.0


def test_trajectory_bands_are_ordered():
    result = compute_heavy_metrics(87500, 60, 1.5, config=SMALL)
    for point in result.trajectory:
        assert point.primary_p10 <= point.primary_p25 <= point.primary_median
        assert point.primary_median <= point.primary_p75 <= point.primary_p90
        assert point.band_10_90 >= point.band_25_75 >= 0


def test_terminal_and_drawdown_ranges():
    result = compute_heavy_metrics(250000, 60, 1.5, config=SMALL)
    for stats in result.terminal.values():
        assert 1.0 <= stats.p25 <= stats.median <= stats.p75 <= 1e15
    for stats in result.drawdown.values():
        assert 0.0 <= stats.median <= stats.p90 <= 1.0


def test_full_map_rows_are_analytic():
    result = compute_heavy_metrics(87500, 60, 1.5, config=SMALL)
    rows = {row.equity: row for row in result.full_map}

    anchor = rows[87500]
    assert anchor.phase == ModelPhase.ANCHOR
    assert anchor.risk_fraction == pytest.approx(0.33)
    assert anchor.dollar_risk == pytest.approx(28875)
    assert anchor.projected_gain == pytest.approx(28875 * 1.5)
    assert anchor.drawdown_1_loss_pct == pytest.approx(33.0)

    floor = rows[20000]
    assert floor.losses_to_ruin == 1
    assert floor.growth_rate == -math.inf
    assert floor.equity_after_1_loss == 1.0
    assert floor.equity_after_3_losses == 1.0

    top = rows[10_000_000]
    assert top.growth_rate > 0
    assert top.gain_3_wins_pct > 0


def test_survival_improves_with_edge():
    config = MetricsConfig(path_count=10, step_count=10)
    strong = compute_heavy_metrics(50000, 70, 2.0, config=config)
    weak = compute_heavy_metrics(50000, 50, 1.0, config=config)
    assert strong.survival_pct > weak.survival_pct


def test_survival_is_zero_without_wins():
    result = compute_heavy_metrics(50000, 0, 2.0, config=SMALL)
    assert result.survival_pct == 0.0


def test_recovery_after_loss_streaks():
    result = compute_heavy_metrics(100000, 60, 1.5, config=SMALL)

    fixed_3 = result.recovery_for(SizingModel.FIXED_FRACTION, 3)
    assert fixed_3.drawdown_pct == pytest.approx((1 - 0.67**3) * 100)
    assert 0 < fixed_3.wins_to_recover < 500

    primary_5 = result.recovery_for(SizingModel.POWER_DECAY, 5)
    primary_3 = result.recovery_for(SizingModel.POWER_DECAY, 3)
    assert primary_5.drawdown_pct >= primary_3.drawdown_pct
    assert primary_5.wins_to_recover >= primary_3.wins_to_recover
    assert result.recovery_for(SizingModel.POWER_DECAY, 4) is None


def test_wiped_account_never_recovers():
    result = compute_heavy_metrics(20000, 60, 1.5, config=SMALL)
    wiped = result.recovery_for(SizingModel.POWER_DECAY, 3)
    assert wiped.drawdown_pct == 100.0
    assert wiped.wins_to_recover == SMALL.recovery_win_cap


def test_seeds_are_explicit_parameters():
    baseline = compute_heavy_metrics(87500, 60, 1.5, config=SMALL)
    reseeded = compute_heavy_metrics(
        87500,
        60,
        1.5,
        config=MetricsConfig(path_count=60, step_count=20, survival_path_count=300, primary_seed=43),
    )
    assert baseline.terminal[SizingModel.FIXED_FRACTION] == reseeded.terminal[SizingModel.FIXED_FRACTION]
    assert baseline.terminal[SizingModel.POWER_DECAY] != reseeded.terminal[SizingModel.POWER_DECAY]


def test_cancelled_token_stops_simulation():
    token = CancelToken()
    token.cancel()
    with pytest.raises(SimulationCancelled):
        compute_heavy_metrics(87500, 60, 1.5, config=SMALL, cancel=token)


def test_wipe_reports_full_drawdown_at_small_equity():
    result = compute_heavy_metrics(5000, 60, 1.5, config=SMALL)
    for model in (SizingModel.POWER_DECAY, SizingModel.CUBE_ROOT_DECAY):
        wiped = result.recovery_for(model, 5)
        assert wiped.drawdown_pct == 100.0
        assert wiped.wins_to_recover == SMALL.recovery_win_cap
    survivor = result.recovery_for(SizingModel.FIXED_FRACTION, 5)
    assert survivor.drawdown_pct == pytest.approx((1 - 0.67**5) * 100)
