"""Pipes that turn a sequence of inputs into a sequence of outputs.

A pipe receives inputs one at a time and may or may not produce an output
for each. When the source is exhausted the pipe is called once more with
``None`` so that it can flush whatever it still holds.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from typing import Generic, TypeVar, Union

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
ErrorT = TypeVar("ErrorT", bound=BaseException)

__all__ = [
    "UniPipe",
    "pipe_iterator",
    "try_pipe_iterator",
    "pipe_stream",
    "try_pipe_stream",
]


class UniPipe(ABC, Generic[InputT, OutputT]):
    """A stateful step that maps inputs to optional outputs."""

    @abstractmethod
    def next(self, input: InputT | None) -> OutputT | None:
        """Consume one input, or ``None`` at the end; return an output or ``None``."""


def pipe_iterator(
    source: Iterable[InputT], pipe: UniPipe[InputT, OutputT]
) -> Iterator[OutputT]:
    """Lazily run every item of ``source`` through ``pipe``, then flush it once."""
    for item in source:
        output = pipe.next(item)
        if output is not None:
            yield output

    output = pipe.next(None)
    if output is not None:
        yield output


def try_pipe_iterator(
    source: Iterable[Union[InputT, ErrorT]], pipe: UniPipe[InputT, OutputT]
) -> Iterator[Union[OutputT, ErrorT]]:
    """Like :func:`pipe_iterator`, but exception items bypass the pipe.

    Items of ``source`` that are exception instances are yielded unchanged
    in their place in the sequence; every other item is fed to the pipe.
    """
    for item in source:
        if isinstance(item, BaseException):
            yield item
            continue
        output = pipe.next(item)
        if output is not None:
            yield output

    output = pipe.next(None)
    if output is not None:
        yield output


async def pipe_stream(
    source: AsyncIterable[InputT], pipe: UniPipe[InputT, OutputT]
) -> AsyncIterator[OutputT]:
    """Run every item of an async ``source`` through ``pipe``, then flush it once."""
    async for item in source:
        output = pipe.next(item)
        if output is not None:
            yield output

    output = pipe.next(None)
    if output is not None:
        yield output


async def try_pipe_stream(
    source: AsyncIterable[Union[InputT, ErrorT]], pipe: UniPipe[InputT, OutputT]
) -> AsyncIterator[Union[OutputT, ErrorT]]:
    """Like :func:`pipe_stream`, but exception items bypass the pipe."""
    async for item in source:
        if isinstance(item, BaseException):
            yield item
            continue
        output = pipe.next(item)
        if output is not None:
            yield output

    output = pipe.next(None)
    if output is not None:
        yield output