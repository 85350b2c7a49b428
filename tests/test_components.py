"""Tests for component selectors, model families and the error hierarchy."""

import pytest

from collinearity_diagnostics import (
    CollinearityError,
    Component,
    ModelKind,
    TermMappingError,
    UnsupportedComponentError,
    resolve_component,
)


class TestResolveComponent:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("conditional", Component.CONDITIONAL),
            ("count", Component.CONDITIONAL),
            ("cond", Component.CONDITIONAL),
            ("zero_inflated", Component.ZERO_INFLATED),
            ("zi", Component.ZERO_INFLATED),
            ("zero-inflated", Component.ZERO_INFLATED),
            ("all", Component.ALL),
            ("  ZI ", Component.ZERO_INFLATED),
            ("Count", Component.CONDITIONAL),
        ],
    )
    def test_aliases(self, name, expected):
        assert resolve_component(name) is expected

    def test_member_passthrough(self):
        assert resolve_component(Component.ALL) is Component.ALL

    def test_unknown_name_raises(self):
        with pytest.raises(UnsupportedComponentError, match="Unknown component"):
            resolve_component("dispersion")

    def test_unknown_name_lists_choices(self):
        with pytest.raises(UnsupportedComponentError, match="zero_inflated"):
            resolve_component("random")

    def test_non_string_raises(self):
        with pytest.raises(UnsupportedComponentError):
            resolve_component(3)


class TestEnums:
    def test_component_compares_to_string(self):
        assert Component.CONDITIONAL == "conditional"
        assert str(Component.ZERO_INFLATED) == "zero_inflated"

    def test_component_labels(self):
        assert Component.CONDITIONAL.label == "conditional"
        assert Component.ZERO_INFLATED.label == "zero inflated"

    def test_model_kind_two_part(self):
        assert not ModelKind.PLAIN.is_two_part
        assert ModelKind.TWO_PART_COUNT.is_two_part
        assert ModelKind.MIXED_TWO_PART.is_two_part
        assert ModelKind.ZERO_INFLATED_MIXED.is_two_part

    def test_model_kind_from_value(self):
        assert ModelKind("mixed_two_part") is ModelKind.MIXED_TWO_PART


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(UnsupportedComponentError, CollinearityError)
        assert issubclass(TermMappingError, CollinearityError)
        assert issubclass(UnsupportedComponentError, ValueError)
        assert issubclass(TermMappingError, ValueError)

    def test_details_in_message(self):
        exc = CollinearityError("bad", details={"n": 3})
        assert str(exc) == "bad | Details: {'n': 3}"

    def test_plain_message_without_details(self):
        assert str(CollinearityError("bad")) == "bad"

    def test_unsupported_component_records_context(self):
        exc = UnsupportedComponentError(
            "no zi", component=Component.ZERO_INFLATED, kind=ModelKind.PLAIN
        )
        assert exc.component is Component.ZERO_INFLATED
        assert exc.kind is ModelKind.PLAIN
        assert exc.details == {"component": "zero_inflated", "kind": "plain"}

    def test_term_mapping_records_unmatched(self):
        exc = TermMappingError("unmapped", unmatched=["zz"])
        assert exc.unmatched == ["zz"]
        assert exc.details["unmatched"] == ["zz"]

    def test_term_mapping_without_unmatched(self):
        exc = TermMappingError("length")
        assert exc.unmatched == []
        assert exc.details == {}
