# unipipe

A small pipe abstraction: write the stepping logic once, then run it over a
plain iterable or an async iterable.

The package has two modules:

- `unipipe.pipe`: the `UniPipe` base class and the four functions that drive
  a source through a pipe.
- `unipipe.extension`: the `unipipe` class decorator, which generates named
  pipe functions from a pipe class's constructors.

## Writing a pipe

A pipe is a subclass of `UniPipe` that implements one method, `next(input)`.
It is called once for every item of the source, and then once more with
`None` to mark the end of the source. Each call returns either an output item
or `None` when there is nothing to emit. Because `None` means "nothing", a
pipe cannot emit `None` as a value, and a `None` item in the source looks to
the pipe like the end marker.

```python
from unipipe.pipe import UniPipe


class SumFive(UniPipe):
    """Emit running sums once they reach five; flush what is left at the end."""

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
```

## Running a pipe over iterables

`pipe_iterator(source, pipe)` is a generator: it feeds every item of `source`
to `pipe`, yields each output that is not `None`, and finally yields what the
pipe returns for the end marker, if anything.

```python
from unipipe.pipe import pipe_iterator

list(pipe_iterator([1, 2, 3, 4, 5, 1], SumFive()))   # [6, 9, 1]
list(pipe_iterator([1, 2, 3, 4, 5, 1], SumFive(1)))  # [7, 9, 1]
```

`try_pipe_iterator(source, pipe)` is for sources whose items may be
exceptions. Items that are exception instances are not fed to the pipe; they
are yielded unchanged, in their place in the sequence, and processing goes on
afterwards. Nothing is raised: it is up to the consumer to check for and raise
them.

```python
from unipipe.pipe import try_pipe_iterator

error = ValueError("bad item")
list(try_pipe_iterator([1, 2, error, 3], SumFive()))  # [error, 6]
```

## Running a pipe over async iterables

`pipe_stream(source, pipe)` and `try_pipe_stream(source, pipe)` are the
asynchronous counterparts. They take an async iterable and are async
generators.

```python
from unipipe.pipe import pipe_stream


async def numbers():
    for value in [1, 2, 3, 4, 5, 1]:
        yield value


async def collect():
    return [item async for item in pipe_stream(numbers(), SumFive())]  # [6, 9, 1]
```

## Generated pipe functions

`unipipe(*extensions)` in `unipipe.extension` returns a class decorator. The
extensions are given as strings or as members of the `Extension` enum:
`"iterator"`, `"try_iterator"`, `"stream"`, `"try_stream"`. An unknown name
raises `ValueError`.

The decorated class must be a subclass of `UniPipe`, or `TypeError` is raised.
Its constructors are the `__init__` defined in the class body and every public
`staticmethod` or `classmethod` there; if there are none, `TypeError` is
raised. For each constructor, the decorator puts functions into a namespace
stored as `cls.pipes`:

- one plain function, if `"iterator"` or `"stream"` was enabled;
- one `try_`-prefixed function, if `"try_iterator"` or `"try_stream"` was
  enabled.

Each function is called as `function(source, *args, **kwargs)`. It builds a
fresh pipe by calling the constructor with `*args, **kwargs` and runs the
source through it. An async iterable source is run as a stream and any other
iterable as an iterator; a source of a kind whose extension was not enabled,
or one that is not iterable at all, raises `TypeError`.

```python
from unipipe.extension import unipipe
from unipipe.pipe import UniPipe


@unipipe("iterator", "try_iterator", "stream", "try_stream")
class SumFive(UniPipe):
    def __init__(self, initial=0):
        self.sum = initial

    @classmethod
    def new_with_initial_sum(cls, total):
        return cls(total)

    def next(self, input):
        ...  # as above


list(SumFive.pipes.sum_five([1, 2, 3, 4, 5, 1]))                      # [6, 9, 1]
list(SumFive.pipes.sum_five_with_initial_sum([1, 2, 3, 4, 5, 1], 1))  # [7, 9, 1]
list(SumFive.pipes.try_sum_five([1, 2, 3]))                           # [6]
```

Function names come from `pipe_method_name(method_name, class_name)`:

- `__init__`, `new` and `default` become the class name in snake case, so
  `SumFive` gives `sum_five`;
- `new_<suffix>` becomes `<class>_<suffix>`, so `new_with_initial_sum` gives
  `sum_five_with_initial_sum`;
- any other name is converted to snake case as it is.

Two constructors that map to the same name (for example `__init__` and a
`default` classmethod) raise `TypeError`. `to_snake_case(name)` is the
conversion used throughout; it handles `CamelCase`, `kebab-case`, spaces and
mixed forms.

## Limits

The decorator attaches functions to `cls.pipes`; it does not add methods to
iterables or async iterables themselves, so pipes are always called as
`cls.pipes.name(source, ...)` rather than chained from the source.