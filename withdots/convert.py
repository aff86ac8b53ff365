"""Conversion of opaque callables into plain Python functions."""

import functools
import inspect
import logging
from typing import Any, Callable, Dict

from .errors import NotCallableError
from .kinds import CallableKind, classify, read_signature

logger = logging.getLogger(__name__)

_ASSIGNED = ("__module__", "__name__", "__qualname__", "__doc__")
_TARGET = "_withdots_target"


class _Name:
    """Stands in for a default value so the signature prints as source."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return self.name


def _define(sig: inspect.Signature, namespace: Dict[str, Any]) -> Callable:
    params = []
    call_args = []
    for i, p in enumerate(sig.parameters.values()):
        if p.default is not inspect.Parameter.empty:
            key = f"_withdots_default_{i}"
            namespace[key] = p.default
            p = p.replace(default=_Name(key))
        params.append(p.replace(annotation=inspect.Parameter.empty))

        if p.kind is inspect.Parameter.VAR_POSITIONAL:
            call_args.append(f"*{p.name}")
        elif p.kind is inspect.Parameter.VAR_KEYWORD:
            call_args.append(f"**{p.name}")
        elif p.kind is inspect.Parameter.KEYWORD_ONLY:
            call_args.append(f"{p.name}={p.name}")
        else:
            call_args.append(p.name)

    header = sig.replace(parameters=params, return_annotation=inspect.Signature.empty)
    source = f"def converted{header}:\n    return {_TARGET}({', '.join(call_args)})\n"
    exec(source, namespace)
    return namespace["converted"]


def as_function(obj: Any) -> Callable:
    """
    Wrap a callable in a plain Python function that forwards every argument.

    Plain functions are returned as they are. For anything else the result
    is defined with the readable signature of ``obj`` as its real parameter
    list; when ``obj`` has none, the result takes ``(*args, **kwargs)`` and
    so already counts as having a catch-all.

    Argument matching stays that of ``obj``: builtins that treat their
    arguments specially keep doing so behind the wrapper.

    Args:
        obj: Any callable

    Returns:
        A plain function equivalent to ``obj``
    """
    if not callable(obj):
        raise NotCallableError(f"{type(obj).__name__} object is not callable")

    if classify(obj) is CallableKind.FUNCTION:
        return obj

    sig = read_signature(obj)
    if sig is None:
        sig = inspect.Signature([
            inspect.Parameter("args", inspect.Parameter.VAR_POSITIONAL),
            inspect.Parameter("kwargs", inspect.Parameter.VAR_KEYWORD),
        ])
    converted = _define(sig, {_TARGET: obj})

    functools.update_wrapper(converted, obj, assigned=_ASSIGNED, updated=())
    del converted.__wrapped__
    if not hasattr(obj, "__name__"):
        converted.__name__ = converted.__qualname__ = type(obj).__name__

    logger.debug(f"Converted {obj!r} to a function with signature {sig}")
    return converted
