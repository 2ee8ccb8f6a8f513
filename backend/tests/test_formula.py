"""Tests for the formula tokenizer, parser and evaluator."""

import math

import pytest
from unitprefs.core.formula.tokenizer import tokenize, TokenType
from unitprefs.core.formula.parser import compile_formula, MAX_DEPTH
from unitprefs.core.formula.ast_nodes import BinaryOp, Call, Number, UnaryOp, Variable
from unitprefs.core.formula.evaluator import evaluate_formula, is_duration_formula, MAX_FORMULA_LENGTH
from unitprefs.errors import (
    FormulaError,
    FormulaEvaluationError,
    FormulaSyntaxError,
    InvalidInputError,
    UnsafeFormulaError,
)


class TestTokenizer:
    def test_simple_expression(self):
        tokens = tokenize("value * 1.94384")
        assert [t.type for t in tokens] == [
            TokenType.IDENT,
            TokenType.OP,
            TokenType.NUMBER,
            TokenType.EOF,
        ]
        assert tokens[2].value == "1.94384"

    def test_exponent_and_leading_dot(self):
        tokens = tokenize("1e-3 + .5")
        numbers = [t.value for t in tokens if t.type == TokenType.NUMBER]
        assert numbers == ["1e-3", ".5"]

    def test_columns_recorded(self):
        tokens = tokenize("pow(value, 2)")
        assert [(t.value, t.col) for t in tokens[:3]] == [("pow", 0), ("(", 3), ("value", 4)]

    def test_empty_input(self):
        tokens = tokenize("")
        assert tokens[-1].type == TokenType.EOF

    @pytest.mark.parametrize("source", [
        "value; import os",
        "value % 3",
        "value[0]",
        "value.__class__",
        "'abc'",
        "value == 1",
    ])
    def test_disallowed_characters(self, source):
        with pytest.raises(UnsafeFormulaError):
            tokenize(source)

    def test_error_reports_column(self):
        with pytest.raises(UnsafeFormulaError) as exc:
            tokenize("value ^ 2")
        assert exc.value.col == 6
        assert "(col 6)" in str(exc.value)


class TestParser:
    def test_precedence(self):
        tree = compile_formula("1 + 2 * value")
        assert tree == BinaryOp("+", Number(1.0), BinaryOp("*", Number(2.0), Variable("value")))

    def test_left_associative(self):
        tree = compile_formula("value - 1 - 2")
        assert tree == BinaryOp("-", BinaryOp("-", Variable("value"), Number(1.0)), Number(2.0))

    def test_unary_minus(self):
        assert compile_formula("-value") == UnaryOp("-", Variable("value"))

    def test_function_call(self):
        tree = compile_formula("max(value, 0, 1)")
        assert isinstance(tree, Call)
        assert tree.func == "max"
        assert len(tree.args) == 3

    @pytest.mark.parametrize("source", ["eval(value)", "os", "__import__", "exp(value)", "values"])
    def test_unknown_identifier_is_unsafe(self, source):
        with pytest.raises(UnsafeFormulaError):
            compile_formula(source)

    @pytest.mark.parametrize("source", ["", "value +", "(value", "value)", "value value", "pow(value)",
                                        "sqrt(value, 2)", "round(value, 1, 2)", "min()", "value ** 2"])
    def test_malformed(self, source):
        with pytest.raises(FormulaSyntaxError):
            compile_formula(source)

    def test_nesting_limit(self):
        source = "(" * (MAX_DEPTH + 5) + "value" + ")" * (MAX_DEPTH + 5)
        with pytest.raises(FormulaSyntaxError):
            compile_formula(source)

    def test_compiled_formulas_are_cached(self):
        assert compile_formula("value * 3.6") is compile_formula("value * 3.6")


class TestEvaluator:
    def test_knots(self):
        assert evaluate_formula("value * 1.94384", 5.0) == pytest.approx(9.7192)

    def test_temperature(self):
        assert evaluate_formula("(value - 273.15) * 9/5 + 32", 273.15) == pytest.approx(32.0)

    def test_functions(self):
        assert evaluate_formula("pow(value, 2)", 3) == 9
        assert evaluate_formula("sqrt(value)", 16) == 4
        assert evaluate_formula("abs(value)", -2.5) == 2.5
        assert evaluate_formula("floor(value)", 2.7) == 2
        assert evaluate_formula("ceil(value)", 2.1) == 3
        assert evaluate_formula("min(value, 10)", 12) == 10
        assert evaluate_formula("max(value)", 12) == 12

    def test_round_half_away_from_zero(self):
        assert evaluate_formula("round(value)", 2.5) == 3
        assert evaluate_formula("round(value)", -2.5) == -3
        assert evaluate_formula("round(value, 2)", 1.005 + 1e-9) == pytest.approx(1.01)

    def test_result_is_float(self):
        assert isinstance(evaluate_formula("value", 5), float)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, "5", None, True])
    def test_invalid_input(self, value):
        with pytest.raises(InvalidInputError):
            evaluate_formula("value", value)

    def test_division_by_zero(self):
        with pytest.raises(FormulaEvaluationError):
            evaluate_formula("1 / value", 0)

    def test_domain_error(self):
        with pytest.raises(FormulaEvaluationError):
            evaluate_formula("sqrt(value)", -1)

    def test_overflow_to_infinity(self):
        with pytest.raises(FormulaEvaluationError):
            evaluate_formula("value * 1e308 * 10", 10)

    def test_host_identifier_never_runs(self):
        with pytest.raises(FormulaError):
            evaluate_formula("__import__('os').system('echo hi')", 1)

    def test_too_long(self):
        formula = "value" + " + 1" * MAX_FORMULA_LENGTH
        with pytest.raises(FormulaSyntaxError):
            evaluate_formula(formula, 1)

    def test_duration_dispatch(self):
        assert evaluate_formula("formatDurationCompact(value)", 3725) == "1h 2m"
        assert evaluate_formula(" formatDurationHMS( value ) ", 3725) == "01:02:05"

    def test_unknown_duration_function(self):
        with pytest.raises(UnsafeFormulaError):
            evaluate_formula("formatDurationEpic(value)", 10)

    def test_is_duration_formula(self):
        assert is_duration_formula("formatDurationMS(value)")
        assert not is_duration_formula("value / 60")

    def test_deterministic(self):
        results = {evaluate_formula("value * 0.514444", 12.5) for _ in range(5)}
        assert len(results) == 1
