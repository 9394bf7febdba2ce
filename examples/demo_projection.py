from risk_engine.logger import setup_logging
from risk_engine.risk import (
    SizingModel,
    consecutive_losses_to_ruin,
    dollar_risk_primary,
    equity_after_streak,
    geometric_growth_rate,
    risk_fraction,
)
from risk_engine.simulator import compute_heavy_metrics, compute_milestones

setup_logging("WARNING")

equity = 87500
win_rate_pct = 60
reward_ratio = 1.5
seed = 555

for model in SizingModel:
    fraction = risk_fraction(model, equity)
    print(f"{model.value}: risk {fraction:.3f}, growth {geometric_growth_rate(fraction, 0.6, reward_ratio):.4f}")

print("Dollar risk:", dollar_risk_primary(equity))
print("Losses to wipe:", consecutive_losses_to_ruin(equity))
print("After 3 losses:", equity_after_streak(equity, 3, False, reward_ratio))

metrics = compute_heavy_metrics(equity, win_rate_pct, reward_ratio)
print("Survival from $20K:", f"{metrics.survival_pct:.1f}%")
for model, stats in metrics.terminal.items():
    print(f"Terminal median ({model.value}):", round(stats.median))

for milestone in compute_milestones(equity, win_rate_pct, reward_ratio, seed):
    print(
        milestone.label,
        "achieved" if milestone.achieved else f"{milestone.progress_pct:.1f}%",
        "best case:",
        milestone.best_case_wins_primary,
        "reach:",
        f"{milestone.primary.reach_pct:.1f}%",
    )
