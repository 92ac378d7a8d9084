"""
Input validation for moderation requests.

- validator.py: Ordered acceptance rules (presence, type, blank, length)
- exceptions.py: RequestValidationError
"""

from .exceptions import RequestValidationError
from .validator import DEFAULT_MAX_LENGTH, text_length, validate

__all__ = [
    "RequestValidationError",
    "DEFAULT_MAX_LENGTH",
    "text_length",
    "validate",
]
