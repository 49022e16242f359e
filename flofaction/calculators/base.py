"""
Abstract base class for the form-driven calculators.

Input: raw form fields dict (strings from the site forms or chat widget)
Output: result dict (model_dump of the calculator's value object)

Each calculator module also exposes a pure function with explicit arguments;
the class only parses form input and delegates to it.
"""

import logging
import math
from abc import ABC, abstractmethod

from ..config import DEFAULT_CONFIG, CalculatorConfig
from ..exceptions import InvalidInputError

logger = logging.getLogger(__name__)


class BaseCalculator(ABC):
    """All registered calculators inherit from this."""

    def __init__(self, config: CalculatorConfig = DEFAULT_CONFIG):
        self.config = config

    @abstractmethod
    def calculate(self, fields: dict) -> dict:
        """
        Takes the submitted form fields.
        Returns the result as a plain dict.
        """
        pass

    # --- Helper methods for all calculators ---

    def parse_number(self, value, default: float = 0.0) -> float:
        """Parse a numeric value from user input. Handles '$1,500', '6%' etc."""
        return parse_number(value, default)

    def parse_int(self, value, default: int = 0) -> int:
        """Parse an integer from user input."""
        if value is None:
            return default
        try:
            return int(float(str(value).strip().replace(",", "")))
        except (ValueError, TypeError):
            return default

    def parse_rate(self, value, default: float = 0.0) -> float:
        """Parse an interest rate. '6', '6%' and '0.06' all mean six percent."""
        if value is None:
            return default
        text = str(value).strip()
        rate = self.parse_number(text.rstrip("%"), default)
        if text.endswith("%") or rate >= 1:
            rate = rate / 100.0
        return rate

    def require(self, fields: dict, *names):
        """Raise InvalidInputError listing every required field that is blank."""
        missing = [n for n in names if fields.get(n) in (None, "")]
        if missing:
            raise InvalidInputError(
                "Missing fields: %s" % ", ".join(missing), missing_fields=missing
            )


def parse_number(value, default: float = 0.0) -> float:
    """Module-level form parser, shared with the lead scorer."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(str(value).strip().replace("$", "").replace(",", ""))
    except (ValueError, TypeError):
        return default
    if math.isnan(number):
        return default
    return number


def require_finite(**values):
    """Reject NaN / infinity before they reach a formula."""
    for name, value in values.items():
        try:
            finite = math.isfinite(value)
        except OverflowError:
            finite = False
        if not finite:
            raise InvalidInputError("%s must be a finite number, got %r" % (name, value))
