"""Class decorator that adds pipe functions to a :class:`UniPipe` class.

``@unipipe("iterator", "stream")`` finds the public constructors of the
decorated class. These are its ``__init__`` and every public ``staticmethod``
or ``classmethod`` in the class body. For each constructor it adds a function
to ``cls.pipes``. The function builds a fresh pipe and runs a source through it.

Function names come from the constructor names. ``__init__``, ``new`` and
``default`` take the class name in snake case. ``new_<suffix>`` becomes
``<class>_<suffix>``. Any other name is snake-cased as it is. The ``try_``
extensions put ``try_`` in front of the name.

The same function serves both sync and async sources. It runs an async
iterable as a stream and any other iterable as an iterator, as far as the
enabled extensions allow.
"""

from __future__ import annotations

import re
from enum import Enum
from types import SimpleNamespace
from typing import Any, Callable, Iterable

from .pipe import UniPipe, pipe_iterator, pipe_stream, try_pipe_iterator, try_pipe_stream

__all__ = ["Extension", "to_snake_case", "pipe_method_name", "unipipe"]


class Extension(Enum):
    """The kinds of source a generated pipe function can accept."""

    ITERATOR = "iterator"
    TRY_ITERATOR = "try_iterator"
    STREAM = "stream"
    TRY_STREAM = "try_stream"

    @property
    def is_try(self) -> bool:
        """Whether exception items in the source bypass the pipe."""
        return self in (Extension.TRY_ITERATOR, Extension.TRY_STREAM)

    @property
    def is_async(self) -> bool:
        """Whether the extension consumes async iterables."""
        return self in (Extension.STREAM, Extension.TRY_STREAM)

    @property
    def prefix(self) -> str:
        """Prefix put in front of generated function names."""
        return "try_" if self.is_try else ""

    @property
    def runner(self) -> Callable[[Any, UniPipe], Any]:
        """The function that drives a source through a pipe."""
        return _RUNNERS[self]


_RUNNERS = {
    Extension.ITERATOR: pipe_iterator,
    Extension.TRY_ITERATOR: try_pipe_iterator,
    Extension.STREAM: pipe_stream,
    Extension.TRY_STREAM: try_pipe_stream,
}

_WORD_SPLIT = re.compile(r"[_\-\s]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_snake_case(name: str) -> str:
    """Convert ``CamelCase``, ``kebab-case`` or mixed names to ``snake_case``."""
    words: list[str] = []
    for chunk in _WORD_SPLIT.split(name):
        words.extend(part for part in _CAMEL_BOUNDARY.split(chunk) if part)
    return "_".join(word.lower() for word in words)


def pipe_method_name(method_name: str, class_name: str) -> str:
    """Derive a pipe function name from a constructor name and its class name."""
    class_snake = to_snake_case(class_name)
    if method_name in ("new", "default", "__init__"):
        return class_snake
    if method_name.startswith("new_"):
        return f"{class_snake}_{method_name[4:]}"
    return to_snake_case(method_name)


def _parse_extension(arg: Extension | str) -> Extension:
    if isinstance(arg, Extension):
        return arg
    try:
        return Extension(arg)
    except ValueError:
        raise ValueError(f"Unknown extension type: {arg}") from None


def _constructors(cls: type) -> Iterable[tuple[str, Callable[..., Any]]]:
    for name, attr in vars(cls).items():
        if name == "__init__":
            yield name, cls
        elif not name.startswith("_") and isinstance(attr, (staticmethod, classmethod)):
            yield name, getattr(cls, name)


def _make_pipe_function(
    name: str, constructor: Callable[..., Any], extensions: list[Extension]
) -> Callable[..., Any]:
    async_extension = next((ext for ext in extensions if ext.is_async), None)
    sync_extension = next((ext for ext in extensions if not ext.is_async), None)

    def run(source: Any, *args: Any, **kwargs: Any) -> Any:
        if hasattr(source, "__aiter__"):
            extension = async_extension
        elif hasattr(source, "__iter__"):
            extension = sync_extension
        else:
            raise TypeError(f"{name}() expects an iterable or async iterable source")
        if extension is None:
            kind = "async iterable" if hasattr(source, "__aiter__") else "iterable"
            raise TypeError(f"{name}() does not accept an {kind} source")
        return extension.runner(source, constructor(*args, **kwargs))

    run.__name__ = name
    run.__qualname__ = name
    run.__doc__ = f"Run ``source`` through a pipe built by ``{getattr(constructor, '__name__', name)}``."
    return run


def unipipe(*args: Extension | str) -> Callable[[type], type]:
    """Return a class decorator that adds pipe functions for the given extensions.

    The functions are collected in a namespace stored as ``cls.pipes``.
    """
    extensions = list(dict.fromkeys(_parse_extension(arg) for arg in args))

    def decorate(cls: type) -> type:
        if not (isinstance(cls, type) and issubclass(cls, UniPipe)):
            raise TypeError("@unipipe can only decorate subclasses of UniPipe")

        constructors = list(_constructors(cls))
        if not constructors:
            raise TypeError("No public constructor methods found in class body")

        functions: dict[str, Callable[..., Any]] = {}
        for method_name, constructor in constructors:
            base_name = pipe_method_name(method_name, cls.__name__)
            for is_try in (False, True):
                group = [ext for ext in extensions if ext.is_try == is_try]
                if not group:
                    continue
                name = f"{group[0].prefix}{base_name}"
                if name in functions:
                    raise TypeError(f"Duplicate pipe function name: {name}")
                functions[name] = _make_pipe_function(name, constructor, group)

        cls.pipes = SimpleNamespace(**functions)
        return cls

    return decorate