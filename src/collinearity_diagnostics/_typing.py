"""Shared type aliases for the collinearity_diagnostics package."""

from collections.abc import Sequence

import numpy as np
import pandas as pd

# Coefficient covariance accepted by the calculator.
CovarianceLike = np.ndarray | pd.DataFrame

# Column-to-term assignment (0 = intercept, 1..n_terms = predictor terms).
AssignmentLike = np.ndarray | Sequence[int]
