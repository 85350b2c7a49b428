"""Model inspection protocol, naming helpers and inspector resolution.

The collinearity core never touches a fitted model directly.  Every
fact it needs about one (family, covariance, design assignment,
predictors, raw data, parameter names) is requested from a
``ModelInspector``.  This keeps the family-specific extraction
quirks of each modelling library out of the numeric code in
:mod:`.diagnostics` and the dispatch in :mod:`.core`.

Native block names
~~~~~~~~~~~~~~~~~~
``vcov`` and ``model_matrix_assignment`` take an optional *block*
argument using the vocabulary of the fitted model itself, not the
:class:`~collinearity_diagnostics.Component` vocabulary:

================================  =========================  =========================
Family                            ``vcov`` blocks            ``model_matrix_assignment``
================================  =========================  =========================
``ModelKind.PLAIN``               ``None``                   ``None``
``ModelKind.TWO_PART_COUNT``      ``"count"``, ``"zero"``    ``"count"``, ``"zero"``
``ModelKind.MIXED_TWO_PART``      ``"fixed-effects"``,       ``"fixed"``, ``"zi_fixed"``
                                  ``"zero_part"``
``ModelKind.ZERO_INFLATED_MIXED`` ``None`` (mapping with     ``None``
                                  ``"cond"``/``"zi"``)
================================  =========================  =========================

Translating components into these names is the job of
:mod:`.covariance` and :mod:`.assignment`.

Parameter-name cleaning
~~~~~~~~~~~~~~~~~~~~~~~
The data-driven term reconstruction matches *synthetic* names
(predictor name concatenated with a factor level) against the
model's coefficient names.  :func:`clean_parameter_name` brings
statsmodels / patsy spellings into that form::

    "Intercept", "const"       -> "(Intercept)"
    "inflate_x1", "zm_x1"      -> "x1"
    "C(g)[T.b]", "g[T.b]"      -> "gb"
    "np.log(dose)"             -> "dose"
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

import numpy as np
import pandas as pd

from .components import Component, ModelKind

INTERCEPT_NAME = "(Intercept)"
"""Canonical cleaned name of an intercept coefficient."""

_INTERCEPT_SPELLINGS = frozenset({"(Intercept)", "Intercept", "intercept", "const"})

# statsmodels zero-part prefixes: zero-inflated ("inflate_") and hurdle ("zm_").
_ZERO_PART_PREFIXES = ("inflate_", "zm_")

# Treatment and full-rank patsy columns: "C(g)[T.b]", "g[T.b]", "g[b]".
_FACTOR_LEVEL = re.compile(r"^(?P<term>.+?)\[(?:T\.)?(?P<level>[^\]]*)\]$")

# "np.log(x)", "C(g, Treatment('a'))", "I(x ** 2)"
_WRAPPER = re.compile(r"^[A-Za-z_][\w\.]*\((?P<inner>.*)\)$")


# ------------------------------------------------------------------ #
# ModelInspector protocol
# ------------------------------------------------------------------ #


@runtime_checkable
class ModelInspector(Protocol):
    """Capabilities the collinearity core consumes from a fitted model.

    Implementations are stateless with respect to the model: every
    method is a read-only query and must never mutate *model*.
    """

    def kind(self, model: Any) -> ModelKind:
        """Classify *model* into one of the four families."""
        ...

    def has_intercept(self, model: Any, component: Component) -> bool:
        """Return ``True`` if the linear predictor of *component* has an intercept."""
        ...

    def find_predictors(self, model: Any, component: Component) -> list[str]:
        """Predictor term names of *component*, in model-formula order."""
        ...

    def vcov(
        self,
        model: Any,
        block: str | None = None,
    ) -> pd.DataFrame | Mapping[str, pd.DataFrame]:
        """Coefficient covariance, optionally scoped to a native block.

        With ``block=None`` natively two-part models may return a
        mapping of named sub-blocks instead of one matrix.

        Raises:
            KeyError: If the model has no block called *block*.
        """
        ...

    def model_matrix_assignment(
        self,
        model: Any,
        block: str | None = None,
    ) -> np.ndarray | None:
        """Design-matrix column-to-term assignment, or ``None`` if not exposed.

        Uses the 0-for-intercept, 1..n_terms convention.
        """
        ...

    def get_data(self, model: Any) -> pd.DataFrame:
        """Raw (pre-expansion) predictor data the model was fit on."""
        ...

    def find_parameters(self, model: Any, component: Component) -> list[str]:
        """Cleaned coefficient names of *component*, aligned with its covariance."""
        ...


# ------------------------------------------------------------------ #
# Naming helpers
# ------------------------------------------------------------------ #


def _first_argument(inner: str) -> str:
    """Return the first top-level, comma-separated argument of *inner*."""
    depth = 0
    for i, ch in enumerate(inner):
        if ch in "([":
            depth += 1
        elif ch in ")]":
            depth -= 1
        elif ch == "," and depth == 0:
            return inner[:i].strip()
    return inner.strip()


def _strip_wrappers(part: str) -> str:
    part = part.strip()
    match = _WRAPPER.match(part)
    while match is not None:
        part = _first_argument(match["inner"])
        match = _WRAPPER.match(part)
    return part


def _strip_zero_part_prefix(name: str) -> str:
    for prefix in _ZERO_PART_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix) :]
    return name


def clean_term_name(term: str) -> str:
    """Strip function wrappers from a formula term name.

    ``"C(g)"`` → ``"g"``, ``"np.log(x)"`` → ``"x"``,
    ``"C(g):np.log(x)"`` → ``"g:x"``.  Interaction parts are cleaned
    one by one and re-joined with ``":"``.
    """
    return ":".join(_strip_wrappers(part) for part in str(term).split(":"))


def _clean_part(part: str) -> str:
    match = _FACTOR_LEVEL.match(part.strip())
    if match is not None:
        return _strip_wrappers(match["term"]) + match["level"]
    return _strip_wrappers(part)


def clean_parameter_name(name: str) -> str:
    """Bring a coefficient name into ``predictor + level`` form.

    Removes the ``inflate_`` and ``zm_`` prefixes statsmodels puts on
    zero-inflation and hurdle zero-model parameters, maps every
    intercept spelling to ``"(Intercept)"``, and rewrites patsy factor
    columns (``C(g)[T.b]``, ``g[T.b]``, ``g[b]``) to ``"gb"``.

    Args:
        name: Raw coefficient name.

    Returns:
        The cleaned name.
    """
    name = _strip_zero_part_prefix(str(name).strip())
    if name in _INTERCEPT_SPELLINGS:
        return INTERCEPT_NAME
    return ":".join(_clean_part(part) for part in name.split(":"))


def predictor_of_parameter(name: str) -> str | None:
    """Return the predictor a cleaned-or-raw coefficient name belongs to.

    ``None`` for intercepts.  Used to infer predictor lists from
    coefficient names when a model carries no formula metadata.
    """
    name = _strip_zero_part_prefix(str(name).strip())
    if name in _INTERCEPT_SPELLINGS:
        return None
    parts = []
    for part in name.split(":"):
        match = _FACTOR_LEVEL.match(part.strip())
        parts.append(_strip_wrappers(match["term"] if match is not None else part))
    return ":".join(parts)


def is_categorical(column: pd.Series) -> bool:
    """Return ``True`` if *column* is expanded into dummy columns by a formula.

    Categorical, object, string and boolean columns are factors;
    numeric columns are not.
    """
    dtype = column.dtype
    if isinstance(dtype, pd.CategoricalDtype):
        return True
    return bool(
        pd.api.types.is_bool_dtype(dtype)
        or pd.api.types.is_object_dtype(dtype)
        or pd.api.types.is_string_dtype(dtype)
    )


def levels_of(column: pd.Series) -> list[str]:
    """Ordered level labels of a categorical *column*.

    Declared categories are kept in their declared order; other
    factor-like columns use their sorted distinct values, which is the
    order formula engines assign dummy columns in.
    """
    if isinstance(column.dtype, pd.CategoricalDtype):
        return [str(level) for level in column.cat.categories]
    values = pd.unique(column.dropna())
    try:
        values = sorted(values)
    except TypeError:
        values = sorted(values, key=str)
    return [str(level) for level in values]


# ------------------------------------------------------------------ #
# Inspector registry
# ------------------------------------------------------------------ #

_INSPECTORS: list[tuple[Callable[[Any], bool], type]] = []
"""Ordered ``(predicate, inspector class)`` pairs; first match wins."""


def register_inspector(predicate: Callable[[Any], bool], cls: type) -> None:
    """Register a ``ModelInspector`` class for models matching *predicate*.

    Later registrations take precedence, so user inspectors can
    override the built-in ones for the same model type.

    Args:
        predicate: Callable returning ``True`` for models *cls* handles.
        cls: A class implementing the ``ModelInspector`` protocol,
            constructible without arguments.

    Raises:
        TypeError: If *cls* does not satisfy the ``ModelInspector``
            protocol.
    """
    try:
        instance = cls()
    except Exception:  # noqa: BLE001
        msg = f"{cls!r} could not be instantiated for protocol check."
        raise TypeError(msg) from None
    if not isinstance(instance, ModelInspector):
        msg = f"{cls!r} does not implement the ModelInspector protocol."
        raise TypeError(msg)
    _INSPECTORS.insert(0, (predicate, cls))


def resolve_inspector(
    model: Any,
    inspector: ModelInspector | None = None,
) -> ModelInspector:
    """Return the inspector to use for *model*.

    A pre-configured *inspector* is returned as-is (pass-through), so
    callers can supply e.g. ``StatsmodelsInspector(data=df)``.

    Args:
        model: The fitted model.
        inspector: Optional explicit inspector.

    Returns:
        A ``ModelInspector`` instance.

    Raises:
        TypeError: If *inspector* does not implement the protocol, or
            no registered inspector recognises *model*.
    """
    if inspector is not None:
        if not isinstance(inspector, ModelInspector):
            msg = f"{inspector!r} does not implement the ModelInspector protocol."
            raise TypeError(msg)
        return inspector
    for predicate, cls in _INSPECTORS:
        if predicate(model):
            instance: ModelInspector = cls()
            return instance
    msg = (
        f"No inspector registered for {type(model).__name__!r}.  Pass "
        "inspector=... or describe the model with ModelDescription."
    )
    raise TypeError(msg)


def as_assignment(values: Sequence[int] | np.ndarray | None) -> np.ndarray | None:
    """Coerce an assignment-like sequence to a 1-D integer array (``None`` stays ``None``)."""
    if values is None:
        return None
    arr = np.asarray(values)
    if arr.ndim != 1:
        arr = arr.ravel()
    return arr.astype(int)
