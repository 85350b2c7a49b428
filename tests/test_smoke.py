"""Large-n smoke tests for regression detection.

These tests verify that a collinearity check completes within a
reasonable time bound on a wide model fit to a moderately large
dataset (n=10,000, ~40 coefficient columns).  They catch accidental
quadratic behaviour in the determinant loop and the term
reconstruction.

All tests are marked ``@pytest.mark.slow`` and excluded from the
default ``pytest`` run.  Run them explicitly::

    pytest -m slow
"""

from __future__ import annotations

import time

import numpy as np
import pandas as pd
import pytest
import statsmodels.formula.api as smf

from collinearity_diagnostics import (
    ComponentDescription,
    ModelDescription,
    ModelKind,
    check_collinearity,
    set_warning_mode,
)

# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #

N = 10_000
P = 20
SEED = 42


def _make_wide_data(n: int = N, p: int = P, seed: int = SEED) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    data = pd.DataFrame({f"x{i + 1}": rng.standard_normal(n) for i in range(p)})
    data["region"] = rng.choice([f"r{i:02d}" for i in range(20)], size=n)
    data["y"] = 2.0 * data["x1"] - 0.5 * data["x2"] + rng.standard_normal(n)
    return data


def _formula(p: int = P) -> str:
    return "y ~ " + " + ".join(f"x{i + 1}" for i in range(p)) + " + region"


@pytest.fixture(autouse=True)
def _silent_notes():
    set_warning_mode("silent")
    yield
    set_warning_mode("auto")


# ------------------------------------------------------------------ #
# Smoke tests
# ------------------------------------------------------------------ #


@pytest.mark.slow
class TestWideOLSSmoke:
    """n=10,000, 20 numerics plus a 20-level factor."""

    def test_completes_within_bound(self) -> None:
        fit = smf.ols(_formula(), _make_wide_data()).fit()
        t0 = time.monotonic()
        result = check_collinearity(fit)
        elapsed = time.monotonic() - t0
        assert elapsed < 10, f"OLS smoke test took {elapsed:.1f}s (limit 10s)"
        assert len(result) == P + 1
        assert result.predictors[-1] == "region"


@pytest.mark.slow
class TestReconstructedTwoPartSmoke:
    """Term reconstruction from raw data for both parts of a wide model."""

    def test_completes_within_bound(self) -> None:
        data = _make_wide_data()
        fit = smf.ols(_formula(), data).fit()
        cov = fit.cov_params()
        part = ComponentDescription(
            vcov=cov, predictors=[f"x{i + 1}" for i in range(P)] + ["region"]
        )
        model = ModelDescription(ModelKind.ZERO_INFLATED_MIXED, part, part, data=data)
        t0 = time.monotonic()
        result = check_collinearity(model, component="all")
        elapsed = time.monotonic() - t0
        assert elapsed < 10, f"Two-part smoke test took {elapsed:.1f}s (limit 10s)"
        assert len(result) == 2 * (P + 1)
