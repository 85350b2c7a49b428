"""collinearity_diagnostics — Multicollinearity checks for fitted regression models.

Computes one (generalized) variance inflation factor per predictor
term from a fitted model's coefficient covariance matrix, across model
families: plain linear / generalized / mixed models, two-part hurdle and
zero-inflated count models, and mixed two-part models.  Factor
predictors expanded into several dummy columns yield a single VIF; for
two-part models the count and zero-inflation predictors can be checked
separately or together.

Public API:
    .. autosummary::
        check_collinearity
        compute_collinearity
        extract_covariance
        resolve_term_assignment
        find_term_assignment
        print_collinearity_table
        classify_vif
        get_warning_mode
        set_warning_mode
        Component
        ModelKind
        resolve_component
        ModelInspector
        StatsmodelsInspector
        DescriptionInspector
        ModelDescription
        ComponentDescription
        register_inspector
        resolve_inspector
        CollinearityResult
        CollinearityRow
        CollinearityNote
        NoteKind
        CollinearityError
        UnsupportedComponentError
        TermMappingError
"""

from ._config import get_warning_mode, set_warning_mode
from ._results import (
    CollinearityNote,
    CollinearityResult,
    CollinearityRow,
    NoteKind,
    classify_vif,
)
from .assignment import find_term_assignment, resolve_term_assignment
from .components import Component, ModelKind, resolve_component
from .core import check_collinearity
from .covariance import extract_covariance
from .described import ComponentDescription, DescriptionInspector, ModelDescription
from .diagnostics import compute_collinearity
from .display import print_collinearity_table
from .errors import CollinearityError, TermMappingError, UnsupportedComponentError
from .inspection import ModelInspector, register_inspector, resolve_inspector
from .inspectors import StatsmodelsInspector

__all__ = [
    "check_collinearity",
    "compute_collinearity",
    "extract_covariance",
    "resolve_term_assignment",
    "find_term_assignment",
    "print_collinearity_table",
    "classify_vif",
    "get_warning_mode",
    "set_warning_mode",
    "Component",
    "ModelKind",
    "resolve_component",
    "ModelInspector",
    "StatsmodelsInspector",
    "DescriptionInspector",
    "ModelDescription",
    "ComponentDescription",
    "register_inspector",
    "resolve_inspector",
    "CollinearityResult",
    "CollinearityRow",
    "CollinearityNote",
    "NoteKind",
    "CollinearityError",
    "UnsupportedComponentError",
    "TermMappingError",
]

__version__ = "0.1.0"
