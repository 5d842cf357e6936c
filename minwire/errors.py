"""Errors raised while registering, resolving, instantiating and binding."""
from typing import Optional, Sequence


class MinwireError(Exception):
    """Base class for all errors raised by minwire."""


class UnknownDependency(MinwireError, LookupError):
    """A dependency token has no matching definition in the registry."""

    def __init__(self, token: str, requester: Optional[str] = None) -> None:
        self.token = token
        self.requester = requester
        if requester is None:
            message = f"unknown dependency {token!r}"
        else:
            message = f"unknown dependency {token!r} (required by {requester!r})"
        super().__init__(message)


class CircularDependency(MinwireError):
    """A service's resolution path revisited itself before construction finished."""

    def __init__(self, path: Sequence[str]) -> None:
        self.path = tuple(path)
        super().__init__("circular dependency: " + " -> ".join(self.path))


class InvalidDependencyKind(MinwireError, TypeError):
    """A definition of the wrong kind was requested (e.g. a controller as a dependency)."""

    def __init__(self, token: str, kind: object, expected: str = "a value or service") -> None:
        self.token = token
        self.kind = kind
        super().__init__(f"{token!r} is a {kind}, expected {expected}")


class MissingElementArgument(MinwireError, TypeError):
    """instantiate() was not given exactly one anchor element."""


class InvalidEventKey(MinwireError, ValueError):
    """An event map key could not be parsed into a selector and an event type."""


class UnknownHandler(MinwireError, AttributeError):
    """An event map names a handler the controller class does not define."""
