"""
Give a callable a catch-all parameter if it does not have one.

The catch-all is the pair ``*args, **kwargs``. A callable that has both
tolerates any number of extra positional and keyword arguments; one that
lacks either is wrapped in a function that has both and silently drops the
arguments the original would have rejected.
"""

import functools
import inspect
import logging
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple

from .errors import NotCallableError, UnsupportedCallableError
from .kinds import CallableKind, classify, code_signature, has_catch_all, read_signature

logger = logging.getLogger(__name__)

VAR_POSITIONAL_NAME = "args"
VAR_KEYWORD_NAME = "kwargs"

# inspect.signature() and help() follow this attribute, so keeping it on the
# rewritten callable would display the old parameter list.
SOURCE_REFERENCE = "__wrapped__"

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)
_KEYWORD_KINDS = (
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


def _unique_name(base: str, taken: set) -> str:
    name = base
    while name in taken:
        name = "_" + name
    return name


def signature_with_catch_all(sig: inspect.Signature) -> inspect.Signature:
    """
    Return ``sig`` with ``*args`` and ``**kwargs`` added where missing.

    Existing parameters keep their order, defaults and annotations. ``*args``
    goes right after the positional parameters (Python requires it to precede
    keyword-only ones) and ``**kwargs`` goes last.
    """
    params = list(sig.parameters.values())
    taken = {p.name for p in params}
    kinds = {p.kind for p in params}

    if inspect.Parameter.VAR_POSITIONAL not in kinds:
        name = _unique_name(VAR_POSITIONAL_NAME, taken)
        taken.add(name)
        index = next(
            (i for i, p in enumerate(params) if p.kind > inspect.Parameter.VAR_POSITIONAL),
            len(params),
        )
        params.insert(index, inspect.Parameter(name, inspect.Parameter.VAR_POSITIONAL))

    if inspect.Parameter.VAR_KEYWORD not in kinds:
        name = _unique_name(VAR_KEYWORD_NAME, taken)
        params.append(inspect.Parameter(name, inspect.Parameter.VAR_KEYWORD))

    return sig.replace(parameters=params)


def _forwarder(f: Callable, sig: inspect.Signature) -> Callable:
    params = sig.parameters.values()
    kinds = {p.kind for p in params}

    # None means f takes any number of them itself
    max_positional: Optional[int] = None
    if inspect.Parameter.VAR_POSITIONAL not in kinds:
        max_positional = sum(1 for p in params if p.kind in _POSITIONAL_KINDS)
    keywords: Optional[FrozenSet[str]] = None
    if inspect.Parameter.VAR_KEYWORD not in kinds:
        keywords = frozenset(p.name for p in params if p.kind in _KEYWORD_KINDS)

    def accepted(args: Tuple[Any, ...], kwargs: Dict[str, Any]):
        if max_positional is not None:
            args = args[:max_positional]
        if keywords is not None:
            kwargs = {k: v for k, v in kwargs.items() if k in keywords}
        return args, kwargs

    if inspect.iscoroutinefunction(f):
        async def with_dots(*args, **kwargs):
            args, kwargs = accepted(args, kwargs)
            return await f(*args, **kwargs)
    elif inspect.isasyncgenfunction(f):
        async def with_dots(*args, **kwargs):
            args, kwargs = accepted(args, kwargs)
            async for item in f(*args, **kwargs):
                yield item
    elif inspect.isgeneratorfunction(f):
        def with_dots(*args, **kwargs):
            args, kwargs = accepted(args, kwargs)
            return (yield from f(*args, **kwargs))
    else:
        def with_dots(*args, **kwargs):
            args, kwargs = accepted(args, kwargs)
            return f(*args, **kwargs)

    return with_dots


def add_catch_all(f: Any) -> Callable:
    """
    Give a function ``*args`` and ``**kwargs`` if it does not have them.

    The parameter list is read from the code of ``f``; an explicit
    ``__signature__`` is display data and is replaced.

    If the parameter list of ``f`` already contains both, ``f`` itself is
    returned with no changes. Otherwise:

    1. The instance attributes of ``f`` (its ``__dict__``) are copied and set
       aside, minus ``__wrapped__``.
    2. A new function is built whose signature is that of ``f`` plus the
       missing catch-all parameters, and which calls ``f`` with only the
       arguments ``f`` understands.
    3. The saved attributes replace whatever the new function carried, along
       with ``f``'s name, qualified name, module, docstring and annotations.
    4. The new function is returned.

    Only plain Python functions and bound methods of them can be rewritten.
    Coroutine, generator and async generator functions stay what they are.
    Builtins, classes, partials and callable instances are returned unchanged
    if their signature already shows a catch-all and rejected otherwise;
    convert them with :func:`withdots.as_function` first, keeping in mind that
    some builtins match arguments in their own way.

    Args:
        f: The callable to extend

    Returns:
        ``f`` or a function that accepts and ignores extra arguments

    Raises:
        NotCallableError: ``f`` is not callable
        UnsupportedCallableError: ``f`` is opaque and has no catch-all

    Example:
        >>> def first(a):
        ...     return a
        >>> add_catch_all(first)(1, 2, junk="ignored")
        1
    """
    if not callable(f):
        raise NotCallableError(
            f"{type(f).__name__} object is not callable. "
            "Consider wrapping it in a function first."
        )

    kind = classify(f)

    if not kind.supports_signature_rewrite:
        sig = read_signature(f)
        if has_catch_all(sig):
            logger.debug(f"Opaque callable {f!r} already has a catch-all")
            return f
        logger.debug(f"Refusing to rewrite opaque callable {f!r}")
        raise UnsupportedCallableError(
            f"{type(f).__name__} object {f!r} cannot have its parameter list rewritten: "
            "only plain Python functions and bound methods can. "
            "Consider passing it to withdots.as_function() first.",
            kind=kind,
            details={
                "type_name": type(f).__name__,
                "signature_available": sig is not None,
            },
        )

    # The code decides which arguments f really takes, not __signature__
    sig = code_signature(f)
    if has_catch_all(sig):
        logger.debug(f"{f.__qualname__} already has a catch-all")
        return f

    owner = f.__func__ if kind is CallableKind.METHOD else f
    attributes = dict(vars(owner))
    attributes.pop(SOURCE_REFERENCE, None)
    attributes.pop("__signature__", None)

    new_sig = signature_with_catch_all(sig)
    with_dots = _forwarder(f, sig)
    functools.update_wrapper(with_dots, f, updated=())
    # Drops the __wrapped__ set by update_wrapper as well
    with_dots.__dict__ = attributes
    with_dots.__signature__ = new_sig

    logger.debug(f"Added catch-all to {f.__qualname__}: {sig} -> {new_sig}")
    return with_dots
