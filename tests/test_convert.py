"""Tests for converting opaque callables into plain functions."""

import functools
import inspect

import pytest

from withdots import (
    CallableKind,
    NotCallableError,
    add_catch_all,
    as_function,
    classify,
    code_signature,
)

import sample_callables as sc


class TestAsFunction:
    """Opaque callables become plain functions with real parameters."""

    def test_plain_function_returned_as_is(self):
        """Plain functions need no conversion."""
        assert as_function(sc.single) is sc.single

    def test_builtin_becomes_function(self):
        """A builtin becomes a function whose code takes its parameters."""
        f = as_function(len)
        assert classify(f) is CallableKind.FUNCTION
        assert f.__name__ == "len"
        assert str(code_signature(f)) == "(obj, /)"
        assert f("abc") == 3

    def test_converted_builtin_accepts_catch_all(self):
        """The documented remedy for builtins works end to end."""
        g = add_catch_all(as_function(len))
        assert str(inspect.signature(g)) == "(obj, /, *args, **kwargs)"
        assert g("abc", 1, junk=2) == 3

    def test_defaults_carried_over(self):
        """Default values of the original are the converted function's defaults."""
        marker = object()

        def pick(a, b=marker, *, c=[1]):
            return (a, b, c)

        f = as_function(functools.partial(pick))
        assert str(code_signature(f)).startswith("(a, b=")
        assert f(1) == (1, marker, [1])
        assert f(1, 2, c=3) == (1, 2, 3)

    def test_callable_instance(self):
        """A callable instance is named after its class."""
        f = as_function(sc.Greeter("bob"))
        assert f.__name__ == "Greeter"
        assert str(code_signature(f)) == "(phrase)"
        assert add_catch_all(f)("hi", "there", loud=True) == "bob: hi"

    def test_bound_method(self):
        """Bound methods convert too."""
        f = as_function(sc.Greeter("bob").greet)
        assert classify(f) is CallableKind.FUNCTION
        assert f() == "Hello from bob"

    def test_no_wrapped_reference(self):
        """The converted function does not point back at the original."""
        assert not hasattr(as_function(len), "__wrapped__")

    def test_unreadable_signature_becomes_catch_all(self):
        """Without a readable signature the result takes anything."""
        f = as_function(sc.Unreadable())
        assert str(inspect.signature(f)) == "(*args, **kwargs)"
        assert add_catch_all(f) is f
        assert f(1) == 1

    def test_not_callable(self):
        """Non-callables are rejected."""
        with pytest.raises(NotCallableError):
            as_function(42)
