"""Exception taxonomy shared by the dungeon and quest engines."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid configuration detected at initialisation time.

    Raised for a credit ladder whose length does not match the level list,
    a ladder that is not strictly ascending, ``up_rate_max <= 1`` and
    similar problems.  Never silently coerced.
    """


class InvalidTransition(RuntimeError):
    """A quest-progress operation was called in a state that forbids it."""

    def __init__(self, operation: str, state: str) -> None:
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while quest progress is {state}")


class GenerationExhausted(RuntimeError):
    """Quest generation could not produce a unique name within the retry cap."""


class EmptyInputError(ValueError):
    """A generator was handed an input it cannot produce output from
    (zero-sized maze, empty map pool, empty name library)."""
