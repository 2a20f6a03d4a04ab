"""
SurfSpots Backend — Validation Package
========================================

What:  Condition factories and the aggregating Validator used by services to
       report every invalid field of a request at once.
"""

from surfspots.validation.validator import Validator, validate_condition

__all__ = ["Validator", "validate_condition"]
