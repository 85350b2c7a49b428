"""Coefficient covariance extraction per model family.

Each family exposes the covariance of its coefficients differently:

* ``TWO_PART_COUNT`` models hold separate ``"count"`` and ``"zero"``
  parameter blocks.
* ``MIXED_TWO_PART`` models hold ``"fixed-effects"`` and
  ``"zero_part"`` blocks.
* ``PLAIN`` and ``ZERO_INFLATED_MIXED`` models return one object for
  the whole model: a single matrix, or (for natively two-part models)
  a mapping of named sub-blocks that is collapsed by name here.

:func:`extract_covariance` hides these differences and always returns
a square, labelled matrix for exactly one component.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np
import pandas as pd

from .components import Component, ModelKind
from .errors import UnsupportedComponentError
from .inspection import ModelInspector

_NATIVE_VCOV_BLOCKS: dict[ModelKind, dict[Component, str]] = {
    ModelKind.TWO_PART_COUNT: {
        Component.CONDITIONAL: "count",
        Component.ZERO_INFLATED: "zero",
    },
    ModelKind.MIXED_TWO_PART: {
        Component.CONDITIONAL: "fixed-effects",
        Component.ZERO_INFLATED: "zero_part",
    },
}
"""Families whose fitted objects expose per-component covariance blocks."""

_COLLAPSE_KEYS: dict[Component, tuple[str, ...]] = {
    Component.CONDITIONAL: ("cond", "conditional"),
    Component.ZERO_INFLATED: ("zi", "zero_inflated"),
}
"""Names a full-model covariance mapping may use for each component."""


def _as_square_frame(cov: Any) -> pd.DataFrame:
    if isinstance(cov, pd.DataFrame):
        shape = cov.shape
    else:
        cov = np.atleast_2d(np.asarray(cov, dtype=float))
        shape = cov.shape
    if len(shape) != 2 or shape[0] != shape[1]:
        msg = f"Coefficient covariance must be square, got shape {shape}."
        raise ValueError(msg)
    if isinstance(cov, pd.DataFrame):
        return cov.astype(float)
    labels = [f"b{i}" for i in range(shape[0])]
    return pd.DataFrame(cov, index=labels, columns=labels)


def _collapse(
    cov: pd.DataFrame | Mapping[str, Any],
    component: Component,
    kind: ModelKind,
) -> Any:
    """Select the *component* sub-block of a full-model covariance."""
    if isinstance(cov, Mapping):
        for key in _COLLAPSE_KEYS[component]:
            if key in cov:
                return cov[key]
        raise UnsupportedComponentError(
            f"The model exposes no {component.label} covariance block "
            f"(available: {', '.join(map(str, cov))}).",
            component=component,
            kind=kind,
        )
    if component is Component.CONDITIONAL:
        return cov
    raise UnsupportedComponentError(
        f"The model has no {component.label} component.",
        component=component,
        kind=kind,
    )


def extract_covariance(
    model: Any,
    component: Component,
    inspector: ModelInspector,
) -> pd.DataFrame:
    """Return the coefficient covariance matrix of one model component.

    Args:
        model: The fitted model (read only).
        component: ``Component.CONDITIONAL`` or
            ``Component.ZERO_INFLATED``.  ``Component.ALL`` must be
            expanded by the caller.
        inspector: Inspector answering queries about *model*.

    Returns:
        Square covariance ``DataFrame`` labelled by coefficient, with
        the intercept (if any) in position 0.

    Raises:
        UnsupportedComponentError: If *component* is ``ALL`` or the
            model's family has no such component.
    """
    kind = inspector.kind(model)
    if component is Component.ALL:
        raise UnsupportedComponentError(
            "component='all' must be expanded before extracting a covariance.",
            component=component,
            kind=kind,
        )

    if kind in _NATIVE_VCOV_BLOCKS:
        block = _NATIVE_VCOV_BLOCKS[kind][component]
        try:
            cov = inspector.vcov(model, block)
        except KeyError as exc:
            raise UnsupportedComponentError(
                f"The model exposes no {block!r} covariance block.",
                component=component,
                kind=kind,
            ) from exc
        return _as_square_frame(cov)

    if kind in (ModelKind.PLAIN, ModelKind.ZERO_INFLATED_MIXED):
        return _as_square_frame(_collapse(inspector.vcov(model), component, kind))

    raise TypeError(f"Unhandled model family {kind!r}.")
