"""Tests for naming helpers and the inspector registry."""

import numpy as np
import pandas as pd
import pytest

import collinearity_diagnostics.inspection as inspection
from collinearity_diagnostics import (
    Component,
    DescriptionInspector,
    ModelKind,
    StatsmodelsInspector,
    register_inspector,
    resolve_inspector,
)
from collinearity_diagnostics.inspection import (
    ModelInspector,
    as_assignment,
    clean_parameter_name,
    clean_term_name,
    is_categorical,
    levels_of,
    predictor_of_parameter,
)


class TestCleanParameterName:
    @pytest.mark.parametrize(
        ("raw", "cleaned"),
        [
            ("Intercept", "(Intercept)"),
            ("const", "(Intercept)"),
            ("(Intercept)", "(Intercept)"),
            ("inflate_Intercept", "(Intercept)"),
            ("x1", "x1"),
            ("inflate_x1", "x1"),
            ("C(g)[T.b]", "gb"),
            ("g[T.b]", "gb"),
            ("g[b]", "gb"),
            ("inflate_C(g)[T.high]", "ghigh"),
            ("zm_const", "(Intercept)"),
            ("zm_x2", "x2"),
            ("np.log(dose)", "dose"),
            ("C(g, Treatment('a'))[T.c]", "gc"),
            ("x1:g[T.b]", "x1:gb"),
        ],
    )
    def test_cleaning(self, raw, cleaned):
        assert clean_parameter_name(raw) == cleaned


class TestCleanTermName:
    @pytest.mark.parametrize(
        ("raw", "cleaned"),
        [
            ("x", "x"),
            ("C(g)", "g"),
            ("np.log(x)", "x"),
            ("C(g):np.log(x)", "g:x"),
            ("C(g, Sum)", "g"),
        ],
    )
    def test_cleaning(self, raw, cleaned):
        assert clean_term_name(raw) == cleaned


class TestPredictorOfParameter:
    def test_intercept_has_no_predictor(self):
        assert predictor_of_parameter("Intercept") is None
        assert predictor_of_parameter("inflate_const") is None
        assert predictor_of_parameter("zm_const") is None

    def test_factor_level(self):
        assert predictor_of_parameter("C(g)[T.b]") == "g"

    def test_numeric(self):
        assert predictor_of_parameter("inflate_x2") == "x2"
        assert predictor_of_parameter("zm_x2") == "x2"


class TestColumnInspection:
    def test_numeric_is_not_categorical(self):
        assert not is_categorical(pd.Series([1.0, 2.0]))
        assert not is_categorical(pd.Series([1, 2]))

    def test_factor_like_columns(self):
        assert is_categorical(pd.Series(["a", "b"]))
        assert is_categorical(pd.Series(["a", "b"], dtype="category"))
        assert is_categorical(pd.Series([True, False]))

    def test_declared_category_order_kept(self):
        col = pd.Series(pd.Categorical(["lo", "hi"], categories=["lo", "mid", "hi"]))
        assert levels_of(col) == ["lo", "mid", "hi"]

    def test_object_levels_sorted(self):
        assert levels_of(pd.Series(["c", "a", "b", "a", None])) == ["a", "b", "c"]

    def test_bool_levels(self):
        assert levels_of(pd.Series([True, False, True])) == ["False", "True"]


class TestAsAssignment:
    def test_none_passthrough(self):
        assert as_assignment(None) is None

    def test_list_to_int_array(self):
        out = as_assignment([0, 1, 1, 2])
        assert out.dtype.kind == "i"
        np.testing.assert_array_equal(out, [0, 1, 1, 2])

    def test_column_vector_flattened(self):
        out = as_assignment(np.array([[0], [1], [2]]))
        assert out.shape == (3,)


class TestInspectorRegistry:
    def setup_method(self):
        self._saved = list(inspection._INSPECTORS)

    def teardown_method(self):
        inspection._INSPECTORS[:] = self._saved

    def test_builtin_inspectors_satisfy_protocol(self):
        assert isinstance(StatsmodelsInspector(), ModelInspector)
        assert isinstance(DescriptionInspector(), ModelInspector)

    def test_unknown_model_raises(self):
        with pytest.raises(TypeError, match="No inspector registered"):
            resolve_inspector(object())

    def test_explicit_inspector_passthrough(self):
        inspector = StatsmodelsInspector(data=pd.DataFrame())
        assert resolve_inspector(object(), inspector) is inspector

    def test_explicit_non_inspector_rejected(self):
        with pytest.raises(TypeError, match="ModelInspector protocol"):
            resolve_inspector(object(), inspector=object())

    def test_register_rejects_non_inspector(self):
        class NotAnInspector:
            pass

        with pytest.raises(TypeError, match="does not implement"):
            register_inspector(lambda model: True, NotAnInspector)

    def test_register_rejects_uninstantiable(self):
        class NeedsArgs(DescriptionInspector):
            def __init__(self, required):
                self.required = required

        with pytest.raises(TypeError, match="could not be instantiated"):
            register_inspector(lambda model: True, NeedsArgs)

    def test_later_registration_takes_precedence(self):
        class Marker:
            pass

        class CustomInspector(DescriptionInspector):
            def kind(self, model):
                return ModelKind.PLAIN

        register_inspector(lambda model: isinstance(model, Marker), CustomInspector)
        assert isinstance(resolve_inspector(Marker()), CustomInspector)

    def test_custom_inspector_reaches_core(self):
        from collinearity_diagnostics import check_collinearity, set_warning_mode

        names = ["(Intercept)", "a", "b"]
        cov = pd.DataFrame(np.eye(3), index=names, columns=names)

        class Fixed:
            pass

        class FixedInspector:
            def kind(self, model):
                return ModelKind.PLAIN

            def has_intercept(self, model, component):
                return True

            def find_predictors(self, model, component):
                return ["a", "b"]

            def vcov(self, model, block=None):
                return cov

            def model_matrix_assignment(self, model, block=None):
                return np.array([0, 1, 2])

            def get_data(self, model):
                return pd.DataFrame()

            def find_parameters(self, model, component):
                return list(names)

        register_inspector(lambda model: isinstance(model, Fixed), FixedInspector)
        set_warning_mode("silent")
        try:
            result = check_collinearity(Fixed(), component=Component.CONDITIONAL)
        finally:
            set_warning_mode("auto")
        assert result.predictors == ["a", "b"]
        np.testing.assert_allclose(result.vifs, [1.0, 1.0])
