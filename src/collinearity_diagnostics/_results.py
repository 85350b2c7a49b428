"""Typed result objects for collinearity checks.

Frozen dataclasses that provide:

* **Attribute access** — ``result.rows``, ``row.vif``, etc.
* **Dict-like access** — ``result["rows"]``, ``result.get("key")``,
  ``"key" in result`` for consumers that prefer bracket syntax.
* **Serialisation** — ``.to_dict()`` returns a plain ``dict[str, Any]``
  with all NumPy types converted to native Python, and
  :meth:`CollinearityResult.to_frame` returns the classic
  ``Predictor`` / ``VIF`` / ``SE_factor`` table as a pandas DataFrame.

Non-fatal conditions are carried as :class:`CollinearityNote` values on
the result rather than raised, so callers can log, ignore or escalate
them.  A result with no rows and an ``INSUFFICIENT_TERMS`` note means
"no diagnostic available", not failure.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar

import numpy as np
import pandas as pd

# ------------------------------------------------------------------ #
# Serialisation helper
# ------------------------------------------------------------------ #


def _numpy_to_python(obj: Any) -> Any:
    """Recursively convert NumPy scalars/arrays to Python-native types.

    Handles nested dicts, lists, tuples, enums, np.ndarray, np.integer
    and np.floating so that ``to_dict`` returns a fully
    JSON-serialisable structure.
    """
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, (np.integer, np.bool_)):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, dict):
        return {k: _numpy_to_python(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_numpy_to_python(item) for item in obj]
    if hasattr(obj, "to_dict") and callable(obj.to_dict):
        return obj.to_dict()
    return obj


# ------------------------------------------------------------------ #
# Dict-compatibility mixin
# ------------------------------------------------------------------ #


class _DictAccessMixin:
    """Dict-like access convenience for result dataclasses.

    Supports three access patterns:

    1. ``result["key"]``     — raises ``KeyError`` on miss
    2. ``result.get(key, d)`` — returns *d* on miss (default ``None``)
    3. ``"key" in result``   — membership test
    """

    # Fields to exclude from to_dict() serialisation.
    _EXCLUDE_FROM_DICT: ClassVar[frozenset[str]] = frozenset()

    def __getitem__(self, key: str) -> Any:
        """Attribute lookup via bracket syntax."""
        try:
            return getattr(self, key)
        except AttributeError:
            raise KeyError(key) from None

    def get(self, key: str, default: Any = None) -> Any:
        """Attribute lookup with a fallback default."""
        return getattr(self, key, default)

    def __contains__(self, key: object) -> bool:
        """Membership test: ``"key" in result``."""
        if not isinstance(key, str):
            return False
        return hasattr(self, key)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary of Python-native values."""
        result: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            if f.name in self._EXCLUDE_FROM_DICT:
                continue
            result[f.name] = _numpy_to_python(getattr(self, f.name))
        return result


# ------------------------------------------------------------------ #
# Notes
# ------------------------------------------------------------------ #


class NoteKind(str, Enum):
    """Kinds of non-fatal collinearity diagnostics."""

    INSUFFICIENT_TERMS = "insufficient_terms"
    NO_INTERCEPT = "no_intercept"


@dataclass(frozen=True)
class CollinearityNote(_DictAccessMixin):
    """A non-fatal diagnostic attached to a result."""

    kind: NoteKind
    """What was detected."""

    message: str
    """Human-readable explanation."""

    component: str | None = None
    """Component label the note refers to, when the model is two-part."""


# ------------------------------------------------------------------ #
# Rows
# ------------------------------------------------------------------ #

VIF_MODERATE = 5.0
"""VIFs at or above this indicate moderate correlation with other predictors."""

VIF_HIGH = 10.0
"""VIFs at or above this indicate high, not tolerable correlation."""


def classify_vif(vif: float) -> str:
    """Return ``"low"``, ``"moderate"`` or ``"high"`` for a VIF value.

    Below 5 is low, 5 up to 10 moderate, 10 and above high.  NaN and
    infinite VIFs (singular correlation matrices) count as high.
    """
    if not math.isfinite(vif) or vif >= VIF_HIGH:
        return "high"
    if vif >= VIF_MODERATE:
        return "moderate"
    return "low"


@dataclass(frozen=True)
class CollinearityRow(_DictAccessMixin):
    """VIF of one predictor term."""

    predictor: str
    """Term name as it appears in the model formula."""

    vif: float
    """Variance inflation factor of the term's coefficient(s)."""

    se_factor: float
    """Factor by which the standard error is inflated, ``sqrt(vif)``."""

    component: str | None = None
    """``"conditional"`` or ``"zero inflated"`` when computed with
    ``component="all"``; ``None`` otherwise."""

    @property
    def correlation(self) -> str:
        """Interpretation band of :attr:`vif` (see :func:`classify_vif`)."""
        return classify_vif(self.vif)

    def tagged(self, component: str) -> CollinearityRow:
        """Return a copy of the row tagged with *component*."""
        return CollinearityRow(self.predictor, self.vif, self.se_factor, component)


# ------------------------------------------------------------------ #
# Result table
# ------------------------------------------------------------------ #


@dataclass(frozen=True)
class CollinearityResult(_DictAccessMixin):
    """Per-term VIF table for one or both components of a model.

    Behaves like a read-only sequence of :class:`CollinearityRow`.
    """

    rows: tuple[CollinearityRow, ...] = ()
    """One row per predictor term, in formula order; conditional rows
    precede zero-inflated rows."""

    notes: tuple[CollinearityNote, ...] = ()
    """Non-fatal diagnostics raised while computing the rows."""

    component: str | None = None
    """The requested component (``"conditional"``, ``"zero_inflated"``
    or ``"all"``)."""

    extras: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    """Intermediate artifacts (correlation matrix, determinant, term
    assignment) keyed by component.  Excluded from ``to_dict()``."""

    _EXCLUDE_FROM_DICT: ClassVar[frozenset[str]] = frozenset({"extras"})

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[CollinearityRow]:  # type: ignore[override]
        return iter(self.rows)

    def __getitem__(self, key: Any) -> Any:
        if isinstance(key, (int, slice)):
            return self.rows[key]
        return super().__getitem__(key)

    @property
    def is_empty(self) -> bool:
        """``True`` when no VIF could be computed."""
        return not self.rows

    @property
    def predictors(self) -> list[str]:
        return [row.predictor for row in self.rows]

    @property
    def vifs(self) -> np.ndarray:
        return np.array([row.vif for row in self.rows], dtype=float)

    def has_note(self, kind: NoteKind | str) -> bool:
        """Return ``True`` if a note of *kind* is attached."""
        kind = NoteKind(kind)
        return any(note.kind is kind for note in self.notes)

    def to_frame(self) -> pd.DataFrame:
        """Return the rows as a DataFrame.

        Columns are ``Predictor``, ``VIF``, ``SE_factor`` and, when any
        row is tagged, ``Component``.
        """
        data: dict[str, list[Any]] = {
            "Predictor": [row.predictor for row in self.rows],
            "VIF": [row.vif for row in self.rows],
            "SE_factor": [row.se_factor for row in self.rows],
        }
        if any(row.component is not None for row in self.rows):
            data["Component"] = [row.component for row in self.rows]
        return pd.DataFrame(data)
