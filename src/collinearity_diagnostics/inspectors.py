"""``ModelInspector`` for fitted statsmodels results.

Handles the results objects returned by ``.fit()`` on statsmodels
regression models:

* **Plain**: ``OLS``/``WLS``/``GLS``, ``GLM``, ``Logit``/``Probit``,
  ``Poisson``, ``NegativeBinomial`` and ``MixedLM``.  The covariance is
  ``cov_params()`` restricted to the mean-model columns, which drops
  random-effect variances (``"Group Var"``) and dispersion parameters
  (``"alpha"``).

* **Two-part count**: zero-inflated Poisson, negative binomial and
  generalized Poisson (``GenericZeroInflated`` subclasses), and hurdle
  models (``HurdleCountModel``).  statsmodels stores both linear
  predictors in one parameter vector and marks the zero-part
  coefficients with a prefix, ``inflate_`` for zero-inflated and
  ``zm_`` for hurdle models; the ``"count"`` and ``"zero"`` blocks are
  selected by that prefix.

Term assignments come from the patsy design info that formula fits
(``smf.ols(...)``, ``Model.from_formula(...)``) attach to
``results.model.data``.  patsy sorts the columns of purely
categorical terms first; terms are renumbered to the order they are
declared in ``results.model.formula``, so rows follow the formula.
Array fits, and the zero-part design of two-part models, carry no
design info: the inspector then reports no native assignment and the
core reconstructs it from the raw data.  Pass that data via
``StatsmodelsInspector(data=...)`` when the model was not fit from a
formula.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd
from patsy import ModelDesc
from statsmodels.discrete.count_model import GenericZeroInflated
from statsmodels.discrete.truncated_model import HurdleCountModel

from ._compat import DataFrameLike, as_pandas_frame
from .components import Component, ModelKind
from .inspection import (
    INTERCEPT_NAME,
    clean_parameter_name,
    clean_term_name,
    predictor_of_parameter,
    register_inspector,
)

_ZERO_PART_PREFIXES: tuple[tuple[type, str], ...] = (
    (GenericZeroInflated, "inflate_"),
    (HurdleCountModel, "zm_"),
)

# Parameters estimated alongside, but outside, the linear predictor.
_AUXILIARY_PARAMS = frozenset({"alpha"})


def _is_statsmodels_results(obj: Any) -> bool:
    """Duck-typed check for a fitted statsmodels results (wrapper) object."""
    return (
        hasattr(obj, "cov_params")
        and hasattr(obj, "params")
        and hasattr(obj, "model")
    )


def _zero_part_prefix(model: Any) -> str | None:
    """Parameter-name prefix of the zero part of a two-part model, if any."""
    for cls, prefix in _ZERO_PART_PREFIXES:
        if isinstance(model, cls):
            return prefix
    return None


def _design_info(results: Any) -> Any | None:
    """Formula design info attached to a results object, if any."""
    data = getattr(results.model, "data", None)
    return getattr(data, "design_info", None)


def _declared_term_names(results: Any) -> list[str] | None:
    """Right-hand-side term names in the order the formula declares them."""
    formula = getattr(results.model, "formula", None)
    if isinstance(formula, str):
        formula = ModelDesc.from_formula(formula)
    if not isinstance(formula, ModelDesc):
        return None
    return [term.name() for term in formula.rhs_termlist]


def _ordered_terms(results: Any, info: Any) -> list[tuple[Any, slice]]:
    """Non-intercept design terms and their column slices, in formula order.

    Terms the formula does not name keep their design order after the
    named ones.
    """
    terms = [(term, columns) for term, columns in info.term_slices.items() if term.factors]
    declared = _declared_term_names(results)
    if declared:
        position = {name: i for i, name in enumerate(declared)}
        terms.sort(key=lambda item: position.get(item[0].name(), len(position)))
    return terms


def _assignment_from_design_info(results: Any, info: Any) -> np.ndarray:
    """Build a 0-for-intercept column-to-term assignment from patsy design info."""
    assign = np.zeros(len(info.column_names), dtype=int)
    for term_index, (_, columns) in enumerate(_ordered_terms(results, info), start=1):
        assign[columns] = term_index
    return assign


def _infer_predictors(names: Sequence[str]) -> list[str]:
    """Predictor names in order of first appearance among coefficient *names*."""
    predictors: list[str] = []
    for name in names:
        predictor = predictor_of_parameter(name)
        if predictor is not None and predictor not in predictors:
            predictors.append(predictor)
    return predictors


@dataclass(frozen=True)
class StatsmodelsInspector:
    """Inspect fitted statsmodels results.

    Attributes:
        data: Raw predictor data (pandas or Polars).  Needed only for
            models fit from arrays or for the zero part of two-part
            models; formula fits fall back to the data frame they were
            fit on.
        predictors: Predictor names of the conditional part, in
            formula order.  Taken from the formula terms, or inferred
            from the coefficient names of array fits, when omitted.
        zero_predictors: Predictor names of the zero part, in formula
            order.  Inferred from the ``inflate_``/``zm_`` coefficient
            names when omitted, which follows the column order of the
            zero-part design matrix.
    """

    data: DataFrameLike | None = field(default=None, repr=False, compare=False)
    predictors: list[str] | None = None
    zero_predictors: list[str] | None = None

    # ---- Classification --------------------------------------------

    def kind(self, model: Any) -> ModelKind:
        if not _is_statsmodels_results(model):
            msg = f"{type(model).__name__!r} is not a fitted statsmodels result."
            raise TypeError(msg)
        if _zero_part_prefix(model.model) is not None:
            return ModelKind.TWO_PART_COUNT
        return ModelKind.PLAIN

    def has_intercept(self, model: Any, component: Component) -> bool:
        return INTERCEPT_NAME in self.find_parameters(model, component)

    # ---- Covariance ------------------------------------------------

    def _cov_frame(self, results: Any) -> pd.DataFrame:
        cov = results.cov_params()
        if isinstance(cov, pd.DataFrame):
            labels = [str(name) for name in cov.index]
            return pd.DataFrame(cov.to_numpy(dtype=float), index=labels, columns=labels)
        cov = np.asarray(cov, dtype=float)
        names = list(getattr(results.params, "index", []))
        if len(names) != cov.shape[0]:
            names = list(getattr(results.model, "exog_names", None) or [])
        if len(names) != cov.shape[0]:
            names = [f"x{i}" for i in range(cov.shape[0])]
        return pd.DataFrame(cov, index=names, columns=names)

    def _block_names(self, results: Any, cov: pd.DataFrame, block: str | None) -> list[str]:
        labels = [str(name) for name in cov.index]
        if block in ("zero", "count"):
            prefix = _zero_part_prefix(results.model)
            if block == "zero":
                return [
                    name
                    for name in labels
                    if name.startswith(prefix)
                    and name[len(prefix) :] not in _AUXILIARY_PARAMS
                ]
            return [
                name
                for name in labels
                if not name.startswith(prefix) and name not in _AUXILIARY_PARAMS
            ]
        info = _design_info(results)
        if info is not None:
            candidates = [str(name) for name in info.column_names]
        else:
            candidates = [
                str(name) for name in (getattr(results.model, "exog_names", None) or labels)
            ]
        present = set(labels)
        return [
            name
            for name in candidates
            if name in present and name not in _AUXILIARY_PARAMS
        ]

    def vcov(self, model: Any, block: str | None = None) -> pd.DataFrame:
        kind = self.kind(model)
        if block is not None and (
            kind is not ModelKind.TWO_PART_COUNT or block not in ("count", "zero")
        ):
            raise KeyError(f"{kind.value!r} results have no vcov block {block!r}")
        cov = self._cov_frame(model)
        keep = self._block_names(model, cov, block)
        return cov.loc[keep, keep]

    # ---- Term structure --------------------------------------------

    def model_matrix_assignment(
        self,
        model: Any,
        block: str | None = None,
    ) -> np.ndarray | None:
        kind = self.kind(model)
        if block == "zero" and kind is ModelKind.TWO_PART_COUNT:
            # The zero-part design is handed to statsmodels as a bare
            # matrix; no term structure survives.
            return None
        if block not in (None, "count"):
            raise KeyError(f"{kind.value!r} results have no model matrix {block!r}")
        info = _design_info(model)
        if info is None:
            return None
        return _assignment_from_design_info(model, info)

    def _raw_parameter_names(self, model: Any, component: Component) -> list[str]:
        kind = self.kind(model)
        cov = self._cov_frame(model)
        if component is Component.ZERO_INFLATED:
            if kind is not ModelKind.TWO_PART_COUNT:
                raise KeyError(f"{kind.value!r} results have no zero-inflation part")
            return self._block_names(model, cov, "zero")
        block = "count" if kind is ModelKind.TWO_PART_COUNT else None
        return self._block_names(model, cov, block)

    def find_predictors(self, model: Any, component: Component) -> list[str]:
        if component is Component.ZERO_INFLATED:
            if self.zero_predictors is not None:
                return list(self.zero_predictors)
            return _infer_predictors(self._raw_parameter_names(model, component))
        if self.predictors is not None:
            return list(self.predictors)
        info = _design_info(model)
        if info is not None:
            return [
                clean_term_name(term.name()) for term, _ in _ordered_terms(model, info)
            ]
        return _infer_predictors(self._raw_parameter_names(model, component))

    def get_data(self, model: Any) -> pd.DataFrame:
        if self.data is not None:
            return as_pandas_frame(self.data, name="data")
        frame = getattr(getattr(model.model, "data", None), "frame", None)
        if isinstance(frame, pd.DataFrame):
            return frame
        return pd.DataFrame()

    def find_parameters(self, model: Any, component: Component) -> list[str]:
        return [
            clean_parameter_name(name)
            for name in self._raw_parameter_names(model, component)
        ]


register_inspector(_is_statsmodels_results, StatsmodelsInspector)
