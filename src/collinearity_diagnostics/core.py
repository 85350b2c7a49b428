"""Collinearity check entry point.

:func:`check_collinearity` is the single public computation of the
package.  It classifies the fitted model into a family via its
inspector, expands ``component="all"`` for two-part models, and for
each concrete component runs the three-step pipeline

    extract_covariance  →  resolve_term_assignment  →  compute_collinearity

before assembling the final table.  Every step is a read-only query of
the model: nothing is cached between calls and the model is never
mutated, so concurrent checks of the same fitted model are safe.

Example::

    import statsmodels.formula.api as smf
    from collinearity_diagnostics import check_collinearity

    fit = smf.ols("mpg ~ wt + cyl + gear + disp", data=mtcars).fit()
    result = check_collinearity(fit)
    result.to_frame()
"""

from __future__ import annotations

import logging
from typing import Any

from ._results import CollinearityNote, CollinearityResult, CollinearityRow
from .assignment import resolve_term_assignment
from .components import Component, ModelKind, resolve_component
from .covariance import extract_covariance
from .diagnostics import compute_collinearity
from .errors import UnsupportedComponentError
from .inspection import ModelInspector, resolve_inspector

logger = logging.getLogger(__name__)


def _check_component(
    model: Any,
    component: Component,
    inspector: ModelInspector,
) -> CollinearityResult:
    """Run extraction, term resolution and VIF computation for one component."""
    cov = extract_covariance(model, component, inspector)
    assign = resolve_term_assignment(
        model, component, inspector, n_coefficients=cov.shape[0]
    )
    predictors = inspector.find_predictors(model, component)
    logger.debug(
        "Checking %s component: %d coefficients, %d terms.",
        component.label,
        cov.shape[0],
        len(predictors),
    )
    # Attribute note warnings to the caller of check_collinearity.
    return compute_collinearity(
        cov, assign, predictors, component=component.label, stacklevel=3
    )


def check_collinearity(
    model: Any,
    component: str | Component = "conditional",
    *,
    inspector: ModelInspector | None = None,
) -> CollinearityResult:
    """Check a fitted model's predictors for multicollinearity.

    Computes one variance inflation factor (VIF) and SE inflation
    factor per predictor term from the coefficient covariance matrix.
    Factor predictors expanded into several dummy columns yield a
    single (generalized) VIF.

    Args:
        model: A fitted model: a statsmodels results object, a
            :class:`~collinearity_diagnostics.ModelDescription`, or any
            object a registered inspector recognises.  Read only.
        component: For two-part models, which linear predictor to
            check: ``"conditional"`` (alias ``"count"``),
            ``"zero_inflated"`` (alias ``"zi"``) or ``"all"``.  Plain
            models accept only ``"conditional"``.
        inspector: Explicit ``ModelInspector``; resolved from the
            registry when omitted.

    Returns:
        A :class:`~collinearity_diagnostics.CollinearityResult`.  With
        ``"all"``, conditional rows precede zero-inflated rows and each
        row carries its ``component`` tag.  Non-fatal conditions (no
        intercept, fewer than two terms) are attached as notes.

    Raises:
        UnsupportedComponentError: If *component* is unknown or not
            applicable to the model's family.
        TermMappingError: If coefficients cannot be mapped to terms.
        TypeError: If no inspector recognises *model*.
    """
    inspector = resolve_inspector(model, inspector)
    component = resolve_component(component)
    kind = inspector.kind(model)

    if kind is ModelKind.PLAIN and component is not Component.CONDITIONAL:
        raise UnsupportedComponentError(
            f"component={component.value!r} is not available for models "
            "without a zero-inflation part; use 'conditional'.",
            component=component,
            kind=kind,
        )

    if component is not Component.ALL:
        result = _check_component(model, component, inspector)
        return CollinearityResult(
            rows=result.rows,
            notes=result.notes,
            component=component.value,
            extras=result.extras,
        )

    rows: list[CollinearityRow] = []
    notes: list[CollinearityNote] = []
    extras: dict[str, Any] = {}
    for part in (Component.CONDITIONAL, Component.ZERO_INFLATED):
        result = _check_component(model, part, inspector)
        rows.extend(row.tagged(part.label) for row in result.rows)
        notes.extend(result.notes)
        extras.update(result.extras)

    return CollinearityResult(
        rows=tuple(rows),
        notes=tuple(notes),
        component=Component.ALL.value,
        extras=extras,
    )
