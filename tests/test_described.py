"""Tests for described models and their inspector."""

import numpy as np
import pandas as pd
import pytest

from collinearity_diagnostics import (
    Component,
    ComponentDescription,
    DescriptionInspector,
    ModelDescription,
    ModelKind,
    resolve_inspector,
)


def _make_vcov(names):
    return pd.DataFrame(np.eye(len(names)), index=names, columns=names)


class TestComponentDescription:
    def test_array_vcov_labelled_from_parameter_names(self):
        part = ComponentDescription(
            vcov=np.eye(2), predictors=("x",), parameter_names=["Intercept", "x"]
        )
        assert list(part.vcov.index) == ["Intercept", "x"]
        assert part.predictors == ["x"]

    def test_array_vcov_generic_labels(self):
        part = ComponentDescription(vcov=np.eye(3), predictors=["a", "b"])
        assert part.parameter_names == ["b0", "b1", "b2"]

    def test_parameter_names_default_to_vcov_labels(self):
        part = ComponentDescription(vcov=_make_vcov(["const", "x"]), predictors=["x"])
        assert part.parameter_names == ["const", "x"]

    def test_assignment_coerced(self):
        part = ComponentDescription(
            vcov=_make_vcov(["const", "x"]), predictors=["x"], assignment=(0, 1)
        )
        assert isinstance(part.assignment, np.ndarray)

    def test_non_square_rejected(self):
        with pytest.raises(ValueError, match="square"):
            ComponentDescription(vcov=np.ones((2, 3)), predictors=["x"])


class TestModelDescription:
    def test_two_part_requires_zero_part(self):
        cond = ComponentDescription(vcov=_make_vcov(["x"]), predictors=["x"])
        with pytest.raises(ValueError, match="zero_inflated"):
            ModelDescription(ModelKind.TWO_PART_COUNT, cond)

    def test_plain_rejects_zero_part(self):
        cond = ComponentDescription(vcov=_make_vcov(["x"]), predictors=["x"])
        with pytest.raises(ValueError, match="no zero-inflation part"):
            ModelDescription(ModelKind.PLAIN, cond, cond)

    def test_kind_from_string(self):
        cond = ComponentDescription(vcov=_make_vcov(["x"]), predictors=["x"])
        assert ModelDescription("plain", cond).kind is ModelKind.PLAIN

    def test_missing_part_raises_key_error(self):
        cond = ComponentDescription(vcov=_make_vcov(["x"]), predictors=["x"])
        with pytest.raises(KeyError):
            ModelDescription(ModelKind.PLAIN, cond).part(Component.ZERO_INFLATED)

    def test_registry_resolves_description_inspector(self):
        cond = ComponentDescription(vcov=_make_vcov(["x"]), predictors=["x"])
        model = ModelDescription(ModelKind.PLAIN, cond)
        assert isinstance(resolve_inspector(model), DescriptionInspector)


class TestDescriptionInspector:
    def setup_method(self):
        cond = ComponentDescription(
            vcov=_make_vcov(["Intercept", "x1", "C(g)[T.b]"]),
            predictors=["x1", "g"],
            assignment=[0, 1, 2],
        )
        zero = ComponentDescription(
            vcov=_make_vcov(["inflate_const", "inflate_x1"]), predictors=["x1"]
        )
        self.data = pd.DataFrame({"x1": [1.0, 2.0], "g": ["a", "b"]})
        self.mixed = ModelDescription(ModelKind.MIXED_TWO_PART, cond, zero, data=self.data)
        self.zim = ModelDescription(ModelKind.ZERO_INFLATED_MIXED, cond, zero)
        self.inspector = DescriptionInspector()

    def test_native_vcov_blocks(self):
        cov = self.inspector.vcov(self.mixed, "zero_part")
        assert list(cov.index) == ["inflate_const", "inflate_x1"]

    def test_full_vcov_is_mapping_for_two_part(self):
        cov = self.inspector.vcov(self.zim)
        assert set(cov) == {"cond", "zi"}

    def test_native_design_blocks(self):
        assert self.inspector.model_matrix_assignment(self.mixed, "zi_fixed") is None
        np.testing.assert_array_equal(
            self.inspector.model_matrix_assignment(self.mixed, "fixed"), [0, 1, 2]
        )

    def test_unknown_design_block(self):
        with pytest.raises(KeyError):
            self.inspector.model_matrix_assignment(self.zim, "zi_fixed")

    def test_parameters_cleaned(self):
        assert self.inspector.find_parameters(self.mixed, Component.CONDITIONAL) == [
            "(Intercept)", "x1", "gb",
        ]
        assert self.inspector.find_parameters(self.mixed, Component.ZERO_INFLATED) == [
            "(Intercept)", "x1",
        ]

    def test_has_intercept_inferred(self):
        assert self.inspector.has_intercept(self.mixed, Component.ZERO_INFLATED)

    def test_has_intercept_explicit(self):
        model = ModelDescription(
            ModelKind.MIXED_TWO_PART, self.mixed.conditional,
            self.mixed.zero_inflated, intercept=False,
        )
        assert not self.inspector.has_intercept(model, Component.CONDITIONAL)

    def test_get_data(self):
        assert self.inspector.get_data(self.mixed) is self.data
        assert self.inspector.get_data(self.zim).empty
