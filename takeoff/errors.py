"""
Calculation error taxonomy.

Hard errors are raised before any line items are aggregated, so a caller
gets either a complete EstimateSummary or one of these.
"""

from dataclasses import dataclass


class CalculationError(Exception):
    """Base for every error the engine raises."""

    code = "calculation_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.message}


class InvalidDimension(CalculationError):
    """A geometric input is non-finite, negative, or outside its hard range."""

    code = "invalid_dimension"


class IncompleteInput(CalculationError):
    """One or more required fields are missing or of the wrong type."""

    code = "incomplete_input"

    def __init__(self, missing: list):
        self.missing = list(missing)
        super().__init__("Missing or invalid fields: %s" % ", ".join(self.missing))

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["missing"] = self.missing
        return payload


class NoViableStock(CalculationError):
    """The stock catalog is empty or has no positive prices."""

    code = "no_viable_stock"


class UnknownTrade(CalculationError):
    """No trade configuration is registered under the requested name."""

    code = "unknown_trade"


@dataclass(frozen=True)
class SoftBoundExceeded:
    """
    Non-fatal: a value is past an advisory limit.

    Never raised. ValidationGate turns these into WarningItems.
    """
    field: str
    value: float
    limit: float
    message: str
