"""Tests for wildcard path pattern matching."""

import pytest
from unitprefs.core.patterns.matcher import (
    compile_pattern,
    find_matching_pattern,
    matches_pattern,
    sort_by_priority,
)
from unitprefs.models.units import PathPatternRule


def rule(pattern, category="speed", priority=0, **kw):
    return PathPatternRule(pattern=pattern, category=category, priority=priority, **kw)


class TestMatchesPattern:
    def test_embedded_star_stays_in_segment(self):
        assert matches_pattern("navigation.speedOverGround", "*.speed*")
        assert not matches_pattern("navigation.deep.speedOverGround", "*.speed*")

    def test_double_star(self):
        assert matches_pattern("speed", "**.speed")
        assert matches_pattern("a.b.speed", "**.speed")
        assert not matches_pattern("a.b.speedy", "**.speed")

    def test_single_star_is_one_segment(self):
        assert matches_pattern("environment.wind.speedTrue", "environment.*.speedTrue")
        assert not matches_pattern("environment.speedTrue", "environment.*.speedTrue")
        assert not matches_pattern("environment.a.b.speedTrue", "environment.*.speedTrue")

    def test_trailing_double_star(self):
        assert matches_pattern("electrical", "electrical.**")
        assert matches_pattern("electrical.batteries.0.voltage", "electrical.**")
        assert not matches_pattern("electricalx.batteries", "electrical.**")

    def test_middle_double_star(self):
        assert matches_pattern("propulsion.temperature", "propulsion.**.temperature")
        assert matches_pattern("propulsion.main.oil.temperature", "propulsion.**.temperature")
        assert not matches_pattern("propulsion.temperatureMax", "propulsion.**.temperature")

    def test_no_wildcard_is_exact(self):
        assert matches_pattern("navigation.headingTrue", "navigation.headingTrue")
        assert not matches_pattern("navigation.headingTrueX", "navigation.headingTrue")
        assert not matches_pattern("x.navigation.headingTrue", "navigation.headingTrue")

    def test_dots_are_literal(self):
        assert not matches_pattern("navigationXheadingTrue", "navigation.headingTrue")

    def test_regex_metacharacters_escaped(self):
        assert matches_pattern("tanks.fuel(1).level", "tanks.fuel(1).level")
        assert not matches_pattern("tanks.fuel1.level", "tanks.fuel(1).level")

    def test_compiled_once(self):
        assert compile_pattern("**.depth") is compile_pattern("**.depth")


class TestFindMatchingPattern:
    def test_empty_rules(self):
        assert find_matching_pattern("navigation.speedOverGround", []) is None
        assert find_matching_pattern("navigation.speedOverGround", None) is None

    def test_highest_priority_wins(self):
        rules = [
            rule("**.speed*", category="velocity", priority=90),
            rule("*.speed*", category="speed", priority=100),
        ]
        found = find_matching_pattern("navigation.speedOverGround", rules)
        assert found.category == "speed"
        assert found.priority == 100

    def test_ties_keep_order(self):
        rules = [rule("**.speed*", category="first"), rule("*.speed*", category="second")]
        assert find_matching_pattern("navigation.speedOverGround", rules).category == "first"

    def test_default_priority_is_zero(self):
        rules = [rule("**", category="catchall"), rule("**.depth", category="depth", priority=1)]
        assert find_matching_pattern("environment.depth", rules).category == "depth"
        assert find_matching_pattern("environment.wind", rules).category == "catchall"

    def test_no_match(self):
        assert find_matching_pattern("design.beam", [rule("*.speed*")]) is None

    def test_sort_is_stable_descending(self):
        rules = [rule("a", priority=1), rule("b", priority=5), rule("c", priority=1), rule("d", priority=5)]
        assert [r.pattern for r in sort_by_priority(rules)] == ["b", "d", "a", "c"]


class TestPatternRuleModel:
    def test_blank_pattern_rejected(self):
        with pytest.raises(ValueError):
            PathPatternRule(pattern="  ", category="speed")

    def test_camel_case_input(self):
        r = PathPatternRule.model_validate(
            {"pattern": "**.timeEpoch", "category": "epoch", "baseUnit": "Epoch Seconds", "targetUnit": "time-24hrs"}
        )
        assert r.base_unit == "Epoch Seconds"
        assert r.target_unit == "time-24hrs"
