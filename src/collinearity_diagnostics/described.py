"""Models described by pre-extracted pieces.

Some fitted models live outside the Python modelling stack: mixed
two-part models fit elsewhere, or results loaded from disk.  A
:class:`ModelDescription` carries the pieces a collinearity check
needs (per-component covariance, predictor names, optional native term
assignment, coefficient names, raw data) together with the family the
model belongs to.  :class:`DescriptionInspector` then answers the
``ModelInspector`` queries the way the original modelling library
would, including its native block names and its gaps (no native
assignment for the zero-inflation part of ``ZERO_INFLATED_MIXED``
models), so the core treats described models exactly like live ones.

Example::

    cond = ComponentDescription(
        vcov=count_vcov,                  # labelled DataFrame
        predictors=["x1", "x2", "group"],
        assignment=[0, 1, 2, 3, 3],
    )
    zi = ComponentDescription(vcov=zi_vcov, predictors=["x1", "group"])
    model = ModelDescription(
        ModelKind.ZERO_INFLATED_MIXED, cond, zi, data=raw_frame
    )
    check_collinearity(model, component="all")
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from ._compat import DataFrameLike, as_pandas_frame
from .components import Component, ModelKind
from .inspection import (
    INTERCEPT_NAME,
    as_assignment,
    clean_parameter_name,
    register_inspector,
)

# ------------------------------------------------------------------ #
# Description containers
# ------------------------------------------------------------------ #


def _as_labelled_frame(vcov: Any, names: Sequence[str] | None) -> pd.DataFrame:
    if isinstance(vcov, pd.DataFrame):
        return vcov
    arr = np.asarray(vcov, dtype=float)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        msg = f"Covariance must be a square matrix, got shape {arr.shape}."
        raise ValueError(msg)
    labels = list(names) if names is not None else [f"b{i}" for i in range(len(arr))]
    return pd.DataFrame(arr, index=labels, columns=labels)


@dataclass(frozen=True, eq=False)
class ComponentDescription:
    """Pieces of one linear predictor.

    Attributes:
        vcov: Square coefficient covariance, as a labelled DataFrame
            or an array (labelled from *parameter_names*).
        predictors: Term names in model-formula order.
        assignment: Native column-to-term assignment, or ``None`` when
            the source model does not expose one.
        parameter_names: Coefficient names aligned with *vcov*;
            defaults to the row labels of *vcov*.
    """

    vcov: pd.DataFrame
    predictors: list[str]
    assignment: np.ndarray | None = None
    parameter_names: list[str] | None = None

    def __post_init__(self) -> None:
        # frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(
            self, "vcov", _as_labelled_frame(self.vcov, self.parameter_names)
        )
        object.__setattr__(self, "predictors", list(self.predictors))
        object.__setattr__(self, "assignment", as_assignment(self.assignment))
        if self.parameter_names is None:
            object.__setattr__(
                self, "parameter_names", [str(n) for n in self.vcov.index]
            )
        else:
            object.__setattr__(self, "parameter_names", list(self.parameter_names))


@dataclass(frozen=True, eq=False)
class ModelDescription:
    """A fitted model given by its extracted pieces.

    Attributes:
        kind: The model family.
        conditional: The conditional (count / fixed-effects) part.
        zero_inflated: The zero-inflation part; required for two-part
            families, must be ``None`` for ``ModelKind.PLAIN``.
        data: Raw predictor data (pandas or Polars) for the
            data-driven term reconstruction.
        intercept: Whether the model has an intercept; inferred from
            the coefficient names when ``None``.
    """

    kind: ModelKind
    conditional: ComponentDescription
    zero_inflated: ComponentDescription | None = None
    data: DataFrameLike | None = field(default=None, repr=False)
    intercept: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ModelKind(self.kind))
        if self.kind.is_two_part and self.zero_inflated is None:
            msg = f"A {self.kind.value!r} model needs a zero_inflated description."
            raise ValueError(msg)
        if not self.kind.is_two_part and self.zero_inflated is not None:
            msg = "A 'plain' model has no zero-inflation part."
            raise ValueError(msg)

    def part(self, component: Component) -> ComponentDescription:
        """Return the description of *component* (``KeyError`` if absent)."""
        if component is Component.CONDITIONAL:
            return self.conditional
        if component is Component.ZERO_INFLATED and self.zero_inflated is not None:
            return self.zero_inflated
        raise KeyError(str(component))


# ------------------------------------------------------------------ #
# DescriptionInspector
# ------------------------------------------------------------------ #
#
# Native block vocabularies per family, as the original modelling
# libraries spell them.  ``vcov(None)`` on a plain model is the single
# matrix; on a zero-inflated mixed model it is a mapping of sub-blocks.

_VCOV_BLOCKS: dict[ModelKind, dict[str, Component]] = {
    ModelKind.TWO_PART_COUNT: {
        "count": Component.CONDITIONAL,
        "zero": Component.ZERO_INFLATED,
    },
    ModelKind.MIXED_TWO_PART: {
        "fixed-effects": Component.CONDITIONAL,
        "zero_part": Component.ZERO_INFLATED,
    },
}

_DESIGN_BLOCKS: dict[ModelKind, dict[str, Component]] = {
    ModelKind.TWO_PART_COUNT: {
        "count": Component.CONDITIONAL,
        "zero": Component.ZERO_INFLATED,
    },
    ModelKind.MIXED_TWO_PART: {
        "fixed": Component.CONDITIONAL,
        "zi_fixed": Component.ZERO_INFLATED,
    },
}


class DescriptionInspector:
    """``ModelInspector`` for :class:`ModelDescription` objects."""

    def kind(self, model: ModelDescription) -> ModelKind:
        return model.kind

    def has_intercept(self, model: ModelDescription, component: Component) -> bool:
        if model.intercept is not None:
            return model.intercept
        names = self.find_parameters(model, component)
        return bool(names) and names[0] == INTERCEPT_NAME

    def find_predictors(
        self, model: ModelDescription, component: Component
    ) -> list[str]:
        return list(model.part(component).predictors)

    def vcov(
        self,
        model: ModelDescription,
        block: str | None = None,
    ) -> pd.DataFrame | Mapping[str, pd.DataFrame]:
        if block is None:
            if model.kind is ModelKind.PLAIN:
                return model.conditional.vcov
            return {
                "cond": model.conditional.vcov,
                "zi": model.part(Component.ZERO_INFLATED).vcov,
            }
        blocks = _VCOV_BLOCKS.get(model.kind, {})
        if block not in blocks:
            raise KeyError(f"{model.kind.value!r} models have no vcov block {block!r}")
        return model.part(blocks[block]).vcov

    def model_matrix_assignment(
        self,
        model: ModelDescription,
        block: str | None = None,
    ) -> np.ndarray | None:
        if block is None:
            # The zero-inflation design of these models is not
            # reachable through the plain accessor.
            return model.conditional.assignment
        blocks = _DESIGN_BLOCKS.get(model.kind, {})
        if block not in blocks:
            raise KeyError(
                f"{model.kind.value!r} models have no model matrix {block!r}"
            )
        return model.part(blocks[block]).assignment

    def get_data(self, model: ModelDescription) -> pd.DataFrame:
        if model.data is None:
            return pd.DataFrame()
        return as_pandas_frame(model.data, name="data")

    def find_parameters(
        self, model: ModelDescription, component: Component
    ) -> list[str]:
        names = model.part(component).parameter_names or []
        return [clean_parameter_name(name) for name in names]


register_inspector(lambda model: isinstance(model, ModelDescription), DescriptionInspector)
