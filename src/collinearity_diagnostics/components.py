"""Model families and linear sub-component selectors.

Two closed vocabularies drive every dispatch decision in the package:

* :class:`ModelKind` — the family a fitted model belongs to.  The
  family decides *where* the coefficient covariance and the term
  assignment live (one full matrix, ``count``/``zero`` blocks,
  ``fixed-effects``/``zero_part`` blocks, or a mapping of named
  sub-blocks).  It is intrinsic to the model and reported by the
  inspector, never chosen by the caller.

* :class:`Component` — which linear predictor of a two-part model to
  analyse.  ``ALL`` is expanded by the dispatcher into one run per
  concrete component.

Both are ``str`` enums so that they compare equal to, and serialise
as, their plain-string values.
"""

from __future__ import annotations

from enum import Enum

from .errors import UnsupportedComponentError


class ModelKind(str, Enum):
    """Closed set of model families understood by the extractors.

    ``PLAIN``
        One linear predictor: OLS/WLS, GLMs, linear mixed models,
        additive models.
    ``TWO_PART_COUNT``
        Hurdle / zero-inflated count models exposing separate
        ``count`` and ``zero`` parameter blocks.
    ``MIXED_TWO_PART``
        Mixed-effects two-part models exposing ``fixed-effects`` and
        ``zero_part`` blocks.
    ``ZERO_INFLATED_MIXED``
        Mixed two-part models whose full covariance is a mapping of
        named sub-blocks and whose zero-inflation design carries no
        native term assignment.
    """

    PLAIN = "plain"
    TWO_PART_COUNT = "two_part_count"
    MIXED_TWO_PART = "mixed_two_part"
    ZERO_INFLATED_MIXED = "zero_inflated_mixed"

    @property
    def is_two_part(self) -> bool:
        """``True`` for families with a zero-inflation linear predictor."""
        return self is not ModelKind.PLAIN

    def __str__(self) -> str:
        return self.value


class Component(str, Enum):
    """Selector for the linear sub-component of a model."""

    CONDITIONAL = "conditional"
    ZERO_INFLATED = "zero_inflated"
    ALL = "all"

    @property
    def label(self) -> str:
        """Tag written to the ``Component`` column of result rows."""
        if self is Component.ZERO_INFLATED:
            return "zero inflated"
        return self.value

    def __str__(self) -> str:
        return self.value


_ALIASES: dict[str, Component] = {
    "conditional": Component.CONDITIONAL,
    "cond": Component.CONDITIONAL,
    "count": Component.CONDITIONAL,
    "zero_inflated": Component.ZERO_INFLATED,
    "zero-inflated": Component.ZERO_INFLATED,
    "zero inflated": Component.ZERO_INFLATED,
    "zi": Component.ZERO_INFLATED,
    "all": Component.ALL,
}
"""Accepted spellings, mapped to their canonical component."""


def resolve_component(component: str | Component) -> Component:
    """Normalise a component name or alias to a :class:`Component`.

    ``"count"`` is an alias of ``"conditional"``; ``"zi"`` of
    ``"zero_inflated"``.  Matching is case-insensitive and ignores
    surrounding whitespace.

    Args:
        component: A :class:`Component` member or a string.

    Returns:
        The canonical :class:`Component`.

    Raises:
        UnsupportedComponentError: If *component* is not recognised.
    """
    if isinstance(component, Component):
        return component
    if isinstance(component, str):
        key = component.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
    available = ", ".join(sorted(_ALIASES))
    raise UnsupportedComponentError(
        f"Unknown component {component!r}.  Available components: {available}.",
        component=component,
    )
