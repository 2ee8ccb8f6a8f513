"""Sandboxed evaluation of conversion formulas.

A formula is either a bare duration call such as ``formatDurationHMS(value)``
or an arithmetic expression over ``value``. Expressions are parsed into an
AST and walked here; nothing is ever handed to ``eval``.
"""

from __future__ import annotations

import math
import re

from unitprefs.core.formula.ast_nodes import Node, Number, Variable, UnaryOp, BinaryOp, Call
from unitprefs.core.formula.durations import DURATION_FUNCTIONS
from unitprefs.core.formula.parser import compile_formula
from unitprefs.errors import (
    FormulaEvaluationError,
    FormulaSyntaxError,
    InvalidInputError,
    UnsafeFormulaError,
)

_DURATION_CALL_RE = re.compile(r"^\s*(formatDuration\w*)\s*\(\s*value\s*\)\s*$")

MAX_FORMULA_LENGTH = 500


def _round_half_away(x: float, digits: float = 0) -> float:
    if digits != int(digits):
        raise FormulaEvaluationError(f"round() digits must be an integer, got {digits}")
    scale = 10.0 ** int(digits)
    return math.copysign(math.floor(abs(x) * scale + 0.5), x) / scale


FUNCTIONS = {
    "pow": math.pow,
    "sqrt": math.sqrt,
    "abs": abs,
    "round": _round_half_away,
    "floor": lambda x: float(math.floor(x)),
    "ceil": lambda x: float(math.ceil(x)),
    "min": lambda *args: min(args),
    "max": lambda *args: max(args),
}


def _walk(node: Node, value: float) -> float:
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Variable):
        return value
    if isinstance(node, UnaryOp):
        operand = _walk(node.operand, value)
        return -operand if node.op == "-" else operand
    if isinstance(node, BinaryOp):
        left = _walk(node.left, value)
        right = _walk(node.right, value)
        if node.op == "+":
            return left + right
        if node.op == "-":
            return left - right
        if node.op == "*":
            return left * right
        return left / right
    if isinstance(node, Call):
        return FUNCTIONS[node.func](*(_walk(arg, value) for arg in node.args))
    raise FormulaEvaluationError(f"Unknown node type {type(node).__name__}")


def check_value(value: object) -> float:
    """Return ``value`` as a float, or raise InvalidInputError."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"Invalid input value: {value!r}")
    if not math.isfinite(value):
        raise InvalidInputError(f"Invalid input value: {value}")
    return float(value)


def is_duration_formula(formula: str) -> bool:
    return _DURATION_CALL_RE.match(formula) is not None


def evaluate_formula(formula: str, value: float) -> float | str:
    """Evaluate ``formula`` with ``value`` bound.

    Returns a finite float for arithmetic formulas and a string for duration
    formatters. Raises InvalidInputError, UnsafeFormulaError,
    FormulaSyntaxError or FormulaEvaluationError.
    """
    value = check_value(value)

    if not isinstance(formula, str):
        raise FormulaSyntaxError(f"Formula must be a string, got {type(formula).__name__}")
    if len(formula) > MAX_FORMULA_LENGTH:
        raise FormulaSyntaxError(f"Formula exceeds {MAX_FORMULA_LENGTH} characters", formula=formula)

    m = _DURATION_CALL_RE.match(formula)
    if m:
        func = DURATION_FUNCTIONS.get(m.group(1))
        if func is None:
            raise UnsafeFormulaError(f"Unknown duration format function: {m.group(1)}", formula=formula)
        return func(value)

    tree = compile_formula(formula)
    try:
        result = _walk(tree, value)
    except (ArithmeticError, ValueError) as exc:
        raise FormulaEvaluationError(
            f'Failed to evaluate formula "{formula}": {exc}', formula=formula
        ) from exc

    if not math.isfinite(result):
        raise FormulaEvaluationError(
            f'Formula "{formula}" produced invalid result: {result}', formula=formula
        )
    return float(result)
