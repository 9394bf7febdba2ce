from __future__ import annotations

import os
from pathlib import Path

import streamlit as st

from risk_engine.config import EngineConfig, load_config
from risk_engine.risk import (
    RiskSeverity,
    SizingModel,
    consecutive_losses_to_ruin,
    dollar_risk_primary,
    geometric_growth_rate,
    growth_per_trade_pct,
    phase_for,
    risk_fraction,
    risk_severity,
)
from risk_engine.simulator import compute_heavy_metrics, compute_milestones


def _format_currency(value: float) -> str:
    return f"${value:,.0f}"


def _format_growth(rate: float) -> str:
    pct = growth_per_trade_pct(rate)
    if pct is None:
        return "Wipe"
    return f"{pct:+.1f}%"


def _load_engine_config() -> EngineConfig:
    path = Path(os.getenv("RISK_ENGINE_CONFIG", "configs/default.yaml"))
    if not path.exists():
        return EngineConfig()
    return load_config(path)


@st.cache_data(show_spinner=False)
def _metrics(equity: float, win_rate_pct: float, reward_ratio: float):
    return compute_heavy_metrics(equity, win_rate_pct, reward_ratio, config=_load_engine_config().metrics)


@st.cache_data(show_spinner=False)
def _milestones(equity: float, win_rate_pct: float, reward_ratio: float, seed: int):
    return compute_milestones(equity, win_rate_pct, reward_ratio, seed, config=_load_engine_config().milestones)


def main() -> None:
    st.set_page_config(page_title="Risk Dashboard", layout="wide")
    st.title("Risk Dashboard")

    settings = _load_engine_config().settings
    equity = st.sidebar.number_input("Equity", min_value=1.0, value=float(settings.initial_equity), step=1000.0)
    win_rate_pct = st.sidebar.slider("Win rate %", 0.0, 100.0, float(settings.win_rate_pct), 1.0)
    reward_ratio = st.sidebar.number_input("Reward ratio", min_value=0.1, value=float(settings.reward_ratio), step=0.1)
    if "seed" not in st.session_state:
        st.session_state.seed = settings.milestone_seed
    if st.sidebar.button("Re-roll"):
        st.session_state.seed += 1
    seed = int(st.session_state.seed)

    fraction = risk_fraction(SizingModel.POWER_DECAY, equity)
    growth = geometric_growth_rate(fraction, win_rate_pct / 100.0, reward_ratio)

    col_a, col_b, col_c, col_d = st.columns(4)
    col_a.metric("Risk %", f"{fraction * 100:.1f}%", phase_for(equity).label)
    col_b.metric("Dollar Risk", _format_currency(dollar_risk_primary(equity)))
    col_c.metric("Growth / Trade", _format_growth(growth))
    col_d.metric("Losses To Wipe", str(consecutive_losses_to_ruin(equity)))

    severity = risk_severity(fraction * 100)
    if severity == RiskSeverity.DANGER:
        st.error("Risk is above the elevated band")
    elif severity == RiskSeverity.ELEVATED:
        st.warning("Risk is elevated")

    with st.spinner("Simulating"):
        metrics = _metrics(equity, win_rate_pct, reward_ratio)
        milestones = _milestones(equity, win_rate_pct, reward_ratio, seed)

    st.subheader("Milestones")
    st.caption(f"Seed #{seed}")
    st.dataframe(
        [
            {
                "milestone": item.label,
                "achieved": item.achieved,
                "progress %": round(item.progress_pct, 1),
                "best case wins": item.best_case_wins_primary,
                "best case wins (fixed)": item.best_case_wins_fixed,
                "reach %": round(item.primary.reach_pct, 1),
                "median trades": item.primary.median,
                "reach % (fixed)": round(item.fixed.reach_pct, 1),
            }
            for item in milestones
        ],
        use_container_width=True,
    )

    st.subheader("Projected Growth (log10 median equity)")
    st.line_chart(
        {
            "power decay": [point.primary_median for point in metrics.trajectory],
            "cube root": [point.legacy_median for point in metrics.trajectory],
            "fixed 33%": [point.fixed_median for point in metrics.trajectory],
        }
    )

    col_e, col_f = st.columns(2)
    col_e.metric("Survival $20K -> anchor", f"{metrics.survival_pct:.1f}%")
    primary_dd = metrics.drawdown[SizingModel.POWER_DECAY]
    col_f.metric("Median max drawdown", f"{primary_dd.median * 100:.1f}%", f"p90 {primary_dd.p90 * 100:.1f}%")

    st.subheader("Data Matrix")
    st.dataframe(
        [
            {
                "equity": row.label,
                "phase": row.phase.label,
                "risk %": round(row.risk_fraction * 100, 2),
                "dollar risk": _format_currency(row.dollar_risk),
                "gain": _format_currency(row.projected_gain),
                "3L drawdown %": round(row.drawdown_3_losses_pct, 1),
                "growth": _format_growth(row.growth_rate),
                "losses to wipe": row.losses_to_ruin,
            }
            for row in metrics.full_map
        ],
        use_container_width=True,
    )

    st.subheader("Stress Test")
    st.dataframe(
        [
            {
                "model": entry.model.value,
                "losses": entry.losses,
                "drawdown %": round(entry.drawdown_pct, 1),
                "wins to recover": entry.wins_to_recover,
            }
            for entry in metrics.recovery
        ],
        use_container_width=True,
    )


if __name__ == "__main__":
    main()
