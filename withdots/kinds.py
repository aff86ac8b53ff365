"""Classification of callables by whether their signature can be rewritten."""

import enum
import inspect
import logging
import types
from typing import Any, Optional

logger = logging.getLogger(__name__)


class CallableKind(enum.Enum):
    FUNCTION = "function"
    METHOD = "method"
    OPAQUE = "opaque"

    @property
    def supports_signature_rewrite(self) -> bool:
        return self is not CallableKind.OPAQUE


def read_signature(obj: Any) -> Optional[inspect.Signature]:
    """
    Best-effort read of a callable's declared parameter list.

    ``__wrapped__`` is not followed: the parameters reported are the ones the
    callable itself accepts, not the ones of whatever it decorates. An
    explicit ``__signature__`` is honoured.

    Returns:
        The signature, or None if the runtime cannot produce one
    """
    try:
        return inspect.signature(obj, follow_wrapped=False)
    except (ValueError, TypeError) as e:
        # Some builtins and objects with a broken __signature__ land here
        logger.debug(f"No signature available for {obj!r}: {e}")
        return None


def code_signature(obj: Any) -> inspect.Signature:
    """
    Signature of the parameters the code of a function or bound method takes.

    ``__signature__`` and ``__wrapped__`` are ignored. For a bound method the
    parameter receiving the instance is left out.
    """
    func = obj.__func__ if inspect.ismethod(obj) else obj
    bare = types.FunctionType(
        func.__code__,
        func.__globals__,
        func.__name__,
        func.__defaults__,
        func.__closure__,
    )
    bare.__kwdefaults__ = func.__kwdefaults__
    bare.__annotations__ = func.__annotations__
    sig = inspect.signature(bare)

    if inspect.ismethod(obj):
        params = list(sig.parameters.values())
        # def m(*args) gets the instance in args
        if params and params[0].kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            sig = sig.replace(parameters=params[1:])
    return sig


def has_catch_all(sig: Optional[inspect.Signature]) -> bool:
    """True if ``sig`` takes both ``*args`` and ``**kwargs``."""
    if sig is None:
        return False
    kinds = {p.kind for p in sig.parameters.values()}
    return inspect.Parameter.VAR_POSITIONAL in kinds and inspect.Parameter.VAR_KEYWORD in kinds


def classify(obj: Any) -> CallableKind:
    if inspect.isfunction(obj):
        return CallableKind.FUNCTION
    if inspect.ismethod(obj) and inspect.isfunction(obj.__func__):
        return CallableKind.METHOD
    return CallableKind.OPAQUE
