"""Variance inflation factors from a coefficient covariance matrix.

The VIF of a term quantifies how much the sampling variance of its
coefficient(s) is inflated by linear correlation with the other
predictors.  For a single-column term it is the familiar
VIF_j = 1 / (1 − R²_j).  Terms spanning several columns (the dummy
columns of a factor) need the *generalized* VIF of Fox & Monette
(1992), which treats the term's columns as one block:

    GVIF_t = det(R_tt) · det(R_oo) / det(R)

where R is the correlation matrix of the coefficient estimates
(intercept removed), R_tt the principal submatrix of the term's
columns and R_oo that of all other columns.  For single-column terms
the two definitions coincide.

Interpretation (James et al., 2013):

* **VIF < 5**: low correlation with the other predictors.
* **5 ≤ VIF < 10**: moderate correlation.
* **VIF ≥ 10**: high, not tolerable correlation.

The standard error of the coefficient grows with √VIF, reported as
the *SE factor*.

Working from the coefficient covariance rather than the design matrix
lets the same computation serve every model family: OLS, GLMs, mixed
models and each linear predictor of a two-part model all produce a
covariance matrix, whereas their design matrices are not always
available.

References:
    Fox, J. & Monette, G. (1992). Generalized collinearity diagnostics.
    *Journal of the American Statistical Association*, 87(417), 178–183.

    James, G., Witten, D., Hastie, T. & Tibshirani, R. (2013). *An
    Introduction to Statistical Learning*. New York: Springer.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence

import numpy as np
import pandas as pd

from ._config import get_warning_mode
from ._results import (
    CollinearityNote,
    CollinearityResult,
    CollinearityRow,
    NoteKind,
    classify_vif,
)
from ._typing import AssignmentLike, CovarianceLike
from .errors import TermMappingError

logger = logging.getLogger(__name__)

__all__ = [
    "classify_vif",
    "compute_collinearity",
    "cov_to_cor",
    "report_note",
]


def report_note(note: CollinearityNote, *, stacklevel: int = 1) -> None:
    """Surface a non-fatal note according to the active warning mode.

    With the default *stacklevel* a warning is attributed to the caller
    of this function; each increment moves one frame further out.
    """
    mode = get_warning_mode()
    if mode == "log":
        logger.warning(note.message)
    elif mode == "warn":
        warnings.warn(note.message, UserWarning, stacklevel=stacklevel + 1)


def cov_to_cor(cov: np.ndarray) -> np.ndarray:
    """Scale a covariance matrix to a correlation matrix.

    R[i, j] = cov[i, j] / √(cov[i, i] · cov[j, j]), with the diagonal
    set to exactly 1.  Zero variances yield NaN rows and columns.
    """
    cov = np.asarray(cov, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        sd = np.sqrt(np.diag(cov))
        corr = cov / np.outer(sd, sd)
    np.fill_diagonal(corr, 1.0)
    return corr


def _det(matrix: np.ndarray) -> np.float64:
    """Determinant with the empty-matrix convention det([]) = 1."""
    if matrix.size == 0:
        return np.float64(1.0)
    return np.float64(np.linalg.det(matrix))


def compute_collinearity(
    cov: CovarianceLike,
    assignment: AssignmentLike,
    predictors: Sequence[str],
    component: str | None = None,
    *,
    stacklevel: int = 1,
) -> CollinearityResult:
    """Compute one (generalized) VIF per predictor term.

    Args:
        cov: Square coefficient covariance matrix, intercept (if any)
            in position 0.
        assignment: Term index of every covariance column: 0 for the
            intercept, 1..n_terms for predictor terms.
        predictors: Term names in formula order; term ``t`` is
            ``predictors[t - 1]``.
        component: Component label attached to notes (e.g.
            ``"conditional"``); rows are left untagged.
        stacklevel: Frames above the caller to attribute note warnings
            to in ``"warn"`` mode; 1 is the caller of this function.

    Returns:
        A :class:`CollinearityResult` with one row per term.  Fewer
        than two terms gives an empty result with an
        ``INSUFFICIENT_TERMS`` note; a model without intercept gets a
        ``NO_INTERCEPT`` note.

    Raises:
        TermMappingError: If *assignment* and *cov* disagree in size, or
            a named predictor has no assigned columns.
    """
    if isinstance(cov, pd.DataFrame):
        cov_arr = cov.to_numpy(dtype=float)
    else:
        cov_arr = np.asarray(cov, dtype=float)
    assign = np.asarray(assignment, dtype=int).ravel()
    if cov_arr.ndim != 2 or cov_arr.shape[0] != cov_arr.shape[1]:
        msg = f"Coefficient covariance must be square, got shape {cov_arr.shape}."
        raise ValueError(msg)
    if assign.size != cov_arr.shape[0]:
        raise TermMappingError(
            f"Term assignment has {assign.size} entries but the covariance "
            f"matrix has {cov_arr.shape[0]} columns.",
            details={
                "n_assigned": int(assign.size),
                "n_coefficients": int(cov_arr.shape[0]),
            },
        )

    notes: list[CollinearityNote] = []

    # Drop the intercept: it absorbs the mean and is not a predictor.
    if assign.size > 0 and assign[0] == 0:
        cov_arr = cov_arr[1:, 1:]
        assign = assign[1:]
    else:
        notes.append(
            CollinearityNote(
                NoteKind.NO_INTERCEPT,
                "Model has no intercept. VIFs may not be reliable.",
                component,
            )
        )

    empty = [
        str(name)
        for term, name in enumerate(predictors, start=1)
        if not np.any(assign == term)
    ]
    if empty:
        raise TermMappingError(
            f"No coefficients are assigned to predictor(s) {', '.join(empty)}.",
            details={"empty_terms": empty},
        )

    n_terms = len(predictors)
    if n_terms < 2:
        notes.append(
            CollinearityNote(
                NoteKind.INSUFFICIENT_TERMS,
                "Not enough model terms to check for multicollinearity.",
                component,
            )
        )
        for note in notes:
            report_note(note, stacklevel=stacklevel + 1)
        return CollinearityResult(rows=(), notes=tuple(notes), component=component)

    corr = cov_to_cor(cov_arr)
    det_r = _det(corr)

    rows: list[CollinearityRow] = []
    # det(R) → 0 under (near-)perfect collinearity; the resulting huge,
    # infinite or NaN VIFs are the diagnostic, not an error.
    with np.errstate(divide="ignore", invalid="ignore"):
        for term, name in enumerate(predictors, start=1):
            subs = assign == term
            vif = (
                _det(corr[np.ix_(subs, subs)])
                * _det(corr[np.ix_(~subs, ~subs)])
                / det_r
            )
            rows.append(
                CollinearityRow(
                    predictor=str(name),
                    vif=float(vif),
                    se_factor=float(np.sqrt(vif)),
                )
            )

    for note in notes:
        report_note(note, stacklevel=stacklevel + 1)

    return CollinearityResult(
        rows=tuple(rows),
        notes=tuple(notes),
        component=component,
        extras={
            component or "model": {
                "correlation": corr,
                "det_correlation": float(det_r),
                "assignment": assign,
            }
        },
    )
