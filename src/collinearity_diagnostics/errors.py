"""Exception hierarchy for collinearity checks.

Exception Hierarchy:
    CollinearityError (base)
    ├── UnsupportedComponentError
    └── TermMappingError

Both concrete errors also derive from :class:`ValueError`, so callers
that already guard argument validation with ``except ValueError`` keep
working.  Non-fatal conditions (no intercept, fewer than two terms) are
never raised; they travel on the result as
:class:`~collinearity_diagnostics.CollinearityNote` values.
"""

from __future__ import annotations

from typing import Any


class CollinearityError(Exception):
    """Base exception for all collinearity-check errors.

    Catch this to handle every failure the package raises on purpose::

        try:
            result = check_collinearity(fit, component="all")
        except CollinearityError as exc:
            logger.error("VIF check failed: %s", exc)
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class UnsupportedComponentError(CollinearityError, ValueError):
    """The requested component does not exist for the model's family.

    Raised for ``"all"`` reaching an extractor directly, for a
    zero-inflation request on a model without a zero-inflation part,
    and for unrecognised component names.
    """

    def __init__(
        self,
        message: str,
        component: Any = None,
        kind: Any = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if component is not None:
            details.setdefault("component", str(component))
        if kind is not None:
            details.setdefault("kind", str(kind))
        super().__init__(message, details)
        self.component = component
        self.kind = kind


class TermMappingError(CollinearityError, ValueError):
    """No complete coefficient-to-term mapping could be built.

    ``unmatched`` lists the coefficient names that could not be tied to
    a predictor term (empty when the failure is a length mismatch).
    """

    def __init__(
        self,
        message: str,
        unmatched: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if unmatched:
            details.setdefault("unmatched", list(unmatched))
        super().__init__(message, details)
        self.unmatched = list(unmatched or [])
