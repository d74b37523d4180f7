"""Pipes whose stepping logic runs unchanged over iterables and async iterables."""

__version__ = "0.2.5"

__all__ = ["pipe", "extension"]