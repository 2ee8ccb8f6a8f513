"""Typed errors raised by the conversion engine.

Every error carries an HTTP-style status so the boundary layer can map it
without inspecting the message:

    UnitsError                     (500)
        InvalidInputError          (400)  value is not a usable number
        FormulaError               (422)
            UnsafeFormulaError            disallowed token in a formula
            FormulaSyntaxError            malformed formula
            FormulaEvaluationError        valid formula, bad result
        DateFormatError            (422)  unparseable instant or pattern
        UnresolvableMetadataError  (404)  no base unit/category derivable
        ConversionNotFoundError    (404)  no matching target conversion
"""

from __future__ import annotations


class UnitsError(Exception):
    """Base class for every error the engine raises on purpose."""

    status: int = 500
    default_user_message = "An unexpected conversion error occurred."
    default_resolution: str | None = None

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        resolution: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.user_message = user_message or self.default_user_message
        self.resolution = resolution or self.default_resolution

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "userMessage": self.user_message,
            "resolution": self.resolution,
            "status": self.status,
        }


class InvalidInputError(UnitsError):
    """Raised when a finite number is required but something else was given."""

    status = 400
    default_user_message = "Invalid input value."
    default_resolution = "Provide a finite numeric value."


# ── Formula errors ───────────────────────────────────────────────────────────

class FormulaError(UnitsError):
    status = 422
    default_user_message = "Unable to evaluate the conversion formula."
    default_resolution = (
        "Check that the conversion formula is valid and the value is within an acceptable range."
    )

    def __init__(self, message: str, formula: str = "", col: int | None = None) -> None:
        self.formula = formula
        self.col = col
        if col is not None:
            message = f"{message} (col {col})"
        super().__init__(message)


class UnsafeFormulaError(FormulaError):
    """A formula referenced something outside the arithmetic grammar."""

    default_user_message = "The conversion formula contains a disallowed token."
    default_resolution = (
        "Formulas may only use 'value', numbers, + - * /, parentheses and "
        "pow, sqrt, abs, round, floor, ceil, min, max."
    )


class FormulaSyntaxError(FormulaError):
    default_user_message = "The conversion formula is malformed."


class FormulaEvaluationError(FormulaError):
    """The formula parsed, but evaluating it failed or gave a non-finite result."""


# ── Conversion errors ────────────────────────────────────────────────────────

class DateFormatError(UnitsError):
    status = 422
    default_user_message = "Unable to format the date value."
    default_resolution = "Supply an ISO-8601 timestamp and a valid date format."


class UnresolvableMetadataError(UnitsError):
    """No base unit or category could be derived. Callers normally pass through."""

    status = 404
    default_user_message = "No unit information is known for this value."


class ConversionNotFoundError(UnitsError):
    status = 404
    default_user_message = "The requested target unit is not available."
    default_resolution = "Pick one of the conversions defined for the base unit."
