"""
Example 1: Basic Mathematical Optimization
-------------------------------------------

This example uses minituna to find the maximum of a simple 2D function
with a few extra parameters of every kind.

The objective is to maximize: f(x, y) = -(x - 3)^2 - (y + 2)^2 + 10
The known optimal solution is at (x=3, y=-2), with a value of 10.
"""

import minituna


def objective(trial):
    """
    The objective function to be maximized.

    Args:
        trial (minituna.Trial): The trial handle provided by the Study.

    Returns:
        float: The value of the function for the suggested parameters.
    """
    x = trial.suggest_float("x", -10, 10)
    y = trial.suggest_float("y", -10, 10)
    scale = trial.suggest_log_float("scale", 1e-3, 1.0)
    shift = trial.suggest_int("shift", 0, 2)
    sign = trial.suggest_categorical("sign", [1, -1])

    if scale < 2e-3:
        raise ValueError("scale too small")  # fails the trial, the study continues

    return -(x - 3)**2 - (y + 2)**2 + 10 - shift * scale * (sign > 0)


def main():
    """
    Run the mathematical optimization study.
    """
    minituna.set_verbosity("WARNING")
    study = minituna.create_study(direction="maximize", seed=42)
    study.optimize(objective, n_trials=200)

    best = study.best_trial
    print(f"Optimal value found: {best.value:.6f} (Expected: 10.0)")
    print(f"Optimal params: x={best.params['x']:.4f}, y={best.params['y']:.4f} (Expected: x=3, y=-2)")

    df = study.trials_dataframe()
    print(df["state"].value_counts().to_string())


if __name__ == "__main__":
    main()
