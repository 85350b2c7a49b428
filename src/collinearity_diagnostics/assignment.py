"""Coefficient-to-term assignment per model family.

A categorical predictor expands into one coefficient per dummy level,
so the covariance matrix has more columns than the model has terms.
The VIF of a term is computed over *all* of its columns jointly, which
requires knowing which term each column belongs to.

Primary path
~~~~~~~~~~~~
Ask the model for the assignment of its design matrix, using the
family's native accessor (``"count"``/``"zero"`` design for two-part
count models, ``"fixed"``/``"zi_fixed"`` for mixed two-part models,
the plain design otherwise).

Fallback path
~~~~~~~~~~~~~
When the native accessor fails, exposes nothing, or does not cover
every covariance column (notably the zero-inflation part of
zero-inflated mixed models), the assignment is reconstructed from the
raw data:

1. Number the component's predictors 1..n in formula order.
2. Expand every categorical predictor into ``predictor + level``
   synthetic names (all levels; the reference level simply never
   matches) and keep numeric predictors as one name, each name
   carrying its predictor's number.  The intercept name carries 0.
3. Look up every cleaned coefficient name in that table.  A name with
   no match is a hard :class:`~collinearity_diagnostics.TermMappingError`.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .components import Component, ModelKind
from .errors import TermMappingError, UnsupportedComponentError
from .inspection import (
    INTERCEPT_NAME,
    ModelInspector,
    as_assignment,
    is_categorical,
    levels_of,
)

logger = logging.getLogger(__name__)

_NATIVE_DESIGN_BLOCKS: dict[ModelKind, dict[Component, str | None]] = {
    ModelKind.PLAIN: {Component.CONDITIONAL: None},
    ModelKind.TWO_PART_COUNT: {
        Component.CONDITIONAL: "count",
        Component.ZERO_INFLATED: "zero",
    },
    ModelKind.MIXED_TWO_PART: {
        Component.CONDITIONAL: "fixed",
        Component.ZERO_INFLATED: "zi_fixed",
    },
    # The zero-inflation design is not exposed natively.
    ModelKind.ZERO_INFLATED_MIXED: {Component.CONDITIONAL: None},
}


def _native_assignment(
    model: Any,
    component: Component,
    inspector: ModelInspector,
) -> np.ndarray | None:
    kind = inspector.kind(model)
    blocks = _NATIVE_DESIGN_BLOCKS[kind]
    if component not in blocks:
        return None
    return as_assignment(inspector.model_matrix_assignment(model, blocks[component]))


def synthetic_parameter_table(
    model: Any,
    component: Component,
    inspector: ModelInspector,
) -> dict[str, int]:
    """Map every synthetic coefficient name of *component* to its term index.

    Args:
        model: The fitted model.
        component: A concrete component (not ``ALL``).
        inspector: Inspector answering queries about *model*.

    Returns:
        ``{name: term_index}`` with 1-based term indices in formula
        order, plus ``"(Intercept)": 0`` when the component has an
        intercept.
    """
    predictors = inspector.find_predictors(model, component)
    data = inspector.get_data(model)

    table: dict[str, int] = {}
    if inspector.has_intercept(model, component):
        table[INTERCEPT_NAME] = 0
    for term_index, predictor in enumerate(predictors, start=1):
        column = data[predictor] if predictor in data.columns else None
        if column is not None and is_categorical(column):
            for level in levels_of(column):
                table.setdefault(f"{predictor}{level}", term_index)
        else:
            table.setdefault(predictor, term_index)
    return table


def find_term_assignment(
    model: Any,
    component: Component,
    inspector: ModelInspector,
) -> np.ndarray:
    """Reconstruct the column-to-term assignment from the raw data.

    Args:
        model: The fitted model.
        component: A concrete component (not ``ALL``).
        inspector: Inspector answering queries about *model*.

    Returns:
        Integer array with one term index per coefficient, in the
        order of the model's coefficient names.

    Raises:
        TermMappingError: If any coefficient name has no synthetic
            counterpart.
    """
    table = synthetic_parameter_table(model, component, inspector)
    names = inspector.find_parameters(model, component)

    unmatched = [name for name in names if name not in table]
    if unmatched:
        raise TermMappingError(
            f"Could not map {len(unmatched)} {component.label} coefficient(s) "
            f"to model terms: {', '.join(unmatched)}.",
            unmatched=unmatched,
        )
    return np.array([table[name] for name in names], dtype=int)


def resolve_term_assignment(
    model: Any,
    component: Component,
    inspector: ModelInspector,
    n_coefficients: int | None = None,
) -> np.ndarray:
    """Return the term index of every coefficient column of *component*.

    Args:
        model: The fitted model (read only).
        component: ``Component.CONDITIONAL`` or
            ``Component.ZERO_INFLATED``.
        inspector: Inspector answering queries about *model*.
        n_coefficients: Number of covariance columns the assignment
            must cover.  A native assignment of a different length is
            discarded in favour of the reconstruction.

    Returns:
        Integer array aligned with the component's covariance matrix
        (0 = intercept, 1..n_terms = predictor terms).

    Raises:
        UnsupportedComponentError: If *component* is ``ALL``.
        TermMappingError: If neither path yields a complete mapping.
    """
    if component is Component.ALL:
        raise UnsupportedComponentError(
            "component='all' must be expanded before resolving term assignments.",
            component=component,
        )

    try:
        assign = _native_assignment(model, component, inspector)
    except Exception as exc:  # noqa: BLE001
        logger.debug(
            "Native %s term assignment failed (%s); reconstructing from data.",
            component.label,
            exc,
        )
        assign = None

    if assign is not None and assign.size == 0:
        assign = None
    if (
        assign is not None
        and n_coefficients is not None
        and assign.size != n_coefficients
    ):
        logger.debug(
            "Native %s term assignment covers %d of %d columns; "
            "reconstructing from data.",
            component.label,
            assign.size,
            n_coefficients,
        )
        assign = None

    if assign is None:
        assign = find_term_assignment(model, component, inspector)

    if n_coefficients is not None and assign.size != n_coefficients:
        raise TermMappingError(
            f"Term assignment has {assign.size} entries but the "
            f"{component.label} covariance has {n_coefficients} columns.",
            details={"n_assigned": int(assign.size), "n_coefficients": n_coefficients},
        )
    return assign
