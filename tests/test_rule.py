#!/usr/bin/env python3
"""Tests for CategoryRule class."""

import pytest
from autocare import CategoryRule, ConfigurationError, DEFAULT_RULES


class TestCategoryRuleKey:
    """Tests for CategoryRule key and description defaults."""

    def test_key_from_component(self):
        rule = CategoryRule("Engine Oil", 5000, 6)
        assert rule.key == "engine_oil"

    def test_explicit_key(self):
        rule = CategoryRule("Engine Oil", 5000, 6, key="oil_change")
        assert rule.key == "oil_change"

    def test_default_description(self):
        rule = CategoryRule("Cabin Air Filter", 15000, 12)
        assert rule.description == "Cabin Air Filter service required"

    def test_explicit_description(self):
        rule = CategoryRule("Engine Oil", 5000, 6, description="Oil change required")
        assert rule.description == "Oil change required"


class TestCategoryRuleValidate:
    """Tests for CategoryRule.validate."""

    def test_valid(self):
        CategoryRule("Engine Oil", 5000, 6).validate()

    @pytest.mark.parametrize("miles, months", [(0, 6), (-10, 6), (5000, 0), (5000, -1)])
    def test_non_positive_interval(self, miles, months):
        rule = CategoryRule("Engine Oil", miles, months)
        with pytest.raises(ConfigurationError) as exc:
            rule.validate()
        assert exc.value.rule == "engine_oil"

    def test_missing_interval(self):
        with pytest.raises(ConfigurationError):
            CategoryRule("Engine Oil", None, 6).validate()


class TestDefaultRules:
    """The built-in oil, tire and brake categories."""

    def test_categories(self):
        assert [r.key for r in DEFAULT_RULES] == [
            "oil_change",
            "tire_rotation",
            "brake_service",
        ]

    def test_intervals(self):
        oil, tires, brakes = DEFAULT_RULES
        assert (oil.mileage_interval, oil.time_interval_months) == (5000, 6)
        assert (tires.mileage_interval, tires.time_interval_months) == (7500, 6)
        assert (brakes.mileage_interval, brakes.time_interval_months) == (15000, 12)

    def test_all_valid(self):
        for rule in DEFAULT_RULES:
            rule.validate()
