"""Response models.

``Response`` is a closed union: every endpoint call yields exactly one
``Result`` (a list of mapped objects) or ``Error`` (a ``PolymerError``).
Match on the variant with ``isinstance`` or structural pattern matching.
"""

from .response import Error, Response, Result

__all__ = [
    "Error",
    "Response",
    "Result",
]
