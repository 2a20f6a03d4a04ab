"""
SurfSpots Backend — Aggregating Validator
===========================================

What:  Collects every failing input rule instead of stopping at the first one.
How:   Conditions are zero-argument callables registered together with the
       Violation they report. validate() evaluates them all in registration
       order and raises a single ValidationError holding every failure.
Who:   Used by every service that accepts user input.

Example:
    v = Validator()
    v.if_false(string_not_empty(name), Violation.INVALID_SPOT_NAME)
    v.if_false(is_latitude(lat), Violation.INVALID_LATITUDE)
    v.validate()  # raises ValidationError([...]) if anything failed
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from surfspots.exceptions import ValidationError, Violation

Condition = Callable[[], bool]


class Validator:
    """Ordered list of (condition, violation) pairs."""

    def __init__(self) -> None:
        self._rules: List[Tuple[Condition, Violation]] = []

    def if_false(self, condition: Condition, error: Violation) -> "Validator":
        """Register ``error`` to be reported when ``condition()`` is falsy."""
        self._rules.append((condition, error))
        return self

    def failures(self) -> List[Violation]:
        return [error for condition, error in self._rules if not condition()]

    def validate(self, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Evaluate all registered conditions.

        Raises:
            ValidationError: listing every failed rule, in registration order.
        """
        errors = self.failures()
        if errors:
            raise ValidationError(errors, context=context)


def validate_condition(condition: Condition, error: Violation) -> None:
    """Single-rule shorthand for ``Validator().if_false(...).validate()``."""
    Validator().if_false(condition, error).validate()
