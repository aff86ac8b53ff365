"""
Exceptions raised by withdots.

Both are subclasses of TypeError so callers that already guard against
"wrong kind of argument" keep working.
"""

from typing import Any, Dict, Optional


class NotCallableError(TypeError):
    pass


class UnsupportedCallableError(TypeError):
    def __init__(self, message: str, kind: Any = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.kind = kind
        self.details = details or {}
