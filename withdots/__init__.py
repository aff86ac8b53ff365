"""
withdots: give Python callables a catch-all parameter.

Provides:
- add_catch_all: add ``*args, **kwargs`` to a function that lacks them
- as_function: turn builtins and other opaque callables into plain functions
"""

from .convert import as_function
from .core import add_catch_all, signature_with_catch_all
from .errors import NotCallableError, UnsupportedCallableError
from .kinds import CallableKind, classify, code_signature, has_catch_all, read_signature

__all__ = [
    "add_catch_all",
    "as_function",
    "signature_with_catch_all",
    "NotCallableError",
    "UnsupportedCallableError",
    "CallableKind",
    "classify",
    "code_signature",
    "has_catch_all",
    "read_signature",
]
__version__ = "0.1.0"
