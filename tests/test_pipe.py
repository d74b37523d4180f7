import pytest

from unipipe.pipe import (
    UniPipe,
    pipe_iterator,
    pipe_stream,
    try_pipe_iterator,
    try_pipe_stream,
)


class SumFive(UniPipe):
    def __init__(self, initial=0):
        self.sum = initial

    def next(self, input):
        if input is not None:
            total = self.sum + input
            if total >= 5:
                self.sum = 0
                return total
            self.sum = total
            return None
        return self.sum if self.sum > 0 else None


class Recorder(UniPipe):
    def __init__(self):
        self.seen = []

    def next(self, input):
        self.seen.append(input)
        return None if input is None else input * 10


class FormatError(Exception):
    pass


async def _aiter(items):
    for item in items:
        yield item


async def _acollect(stream):
    return [item async for item in stream]


def _collect_result(items):
    collected = []
    for item in items:
        if isinstance(item, BaseException):
            return item
        collected.append(item)
    return collected


INPUTS = [1, 2, 3, 4, 5, 1]
OUTPUTS = [6, 9, 1]


def test_iterator_values():
    assert list(pipe_iterator(iter(INPUTS), SumFive())) == OUTPUTS


def test_iterator_initial_sum():
    assert list(pipe_iterator(INPUTS, SumFive(1))) == [7, 9, 1]


def test_iterator_empty_source_only_flushes():
    assert list(pipe_iterator([], SumFive(3))) == [3]
    assert list(pipe_iterator([], SumFive())) == []


def test_iterator_flushes_exactly_once():
    recorder = Recorder()
    iterator = pipe_iterator([1, 2], recorder)
    assert list(iterator) == [10, 20]
    with pytest.raises(StopIteration):
        next(iterator)
    assert recorder.seen == [1, 2, None]


def test_iterator_is_lazy():
    recorder = Recorder()
    iterator = pipe_iterator([1, 2, 3], recorder)
    assert recorder.seen == []
    assert next(iterator) == 10
    assert recorder.seen == [1]


def test_try_iterator_values():
    assert _collect_result(try_pipe_iterator(INPUTS, SumFive())) == OUTPUTS


def test_try_iterator_error_passes_through():
    error = FormatError()
    outputs = list(try_pipe_iterator([1, 2, 3, 4, 5, error], SumFive()))
    assert outputs == [6, 9, error]
    assert _collect_result(outputs) is error


def test_try_iterator_error_not_fed_to_pipe():
    recorder = Recorder()
    error = FormatError()
    assert list(try_pipe_iterator([1, error, 2], recorder)) == [10, error, 20]
    assert recorder.seen == [1, 2, None]


@pytest.mark.asyncio
async def test_stream_values():
    assert await _acollect(pipe_stream(_aiter(INPUTS), SumFive())) == OUTPUTS


@pytest.mark.asyncio
async def test_stream_initial_sum():
    assert await _acollect(pipe_stream(_aiter(INPUTS), SumFive(1))) == [7, 9, 1]


@pytest.mark.asyncio
async def test_try_stream_values():
    outputs = await _acollect(try_pipe_stream(_aiter(INPUTS), SumFive()))
    assert _collect_result(outputs) == OUTPUTS


@pytest.mark.asyncio
async def test_try_stream_error_passes_through():
    error = FormatError()
    outputs = await _acollect(
        try_pipe_stream(_aiter([1, 2, 3, 4, 5, error]), SumFive())
    )
    assert outputs == [6, 9, error]
    assert _collect_result(outputs) is error


@pytest.mark.asyncio
async def test_stream_flushes_once():
    recorder = Recorder()
    assert await _acollect(pipe_stream(_aiter([4]), recorder)) == [40]
    assert recorder.seen == [4, None]


def test_unipipe_is_abstract():
    with pytest.raises(TypeError):
        UniPipe()