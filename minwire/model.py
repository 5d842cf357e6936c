"""Definitions describe how the runtime builds each named value, service or controller."""
import enum
from typing import Any, Callable, Sequence, Tuple

import attr


class Kind(enum.Enum):
    VALUE = "value"
    SERVICE = "service"
    CONTROLLER = "controller"

    def __str__(self) -> str:
        return self.value


def _to_tokens(dependencies: Sequence[str]) -> Tuple[str, ...]:
    if isinstance(dependencies, str):
        raise TypeError(f"dependencies must be a sequence of names, not {dependencies!r}")
    return tuple(dependencies)


@attr.frozen
class Definition:
    """A named, registered description of how to build something.

    factory depends on kind:
        VALUE: a zero-argument producer returning the value.
        SERVICE: a class called with the dependencies, or a function called as
            factory(instance, *dependencies) which fills in a fresh instance.
        CONTROLLER: called with the dependencies, returns the controller class.
    """

    kind: Kind
    name: str
    factory: Callable[..., Any] = attr.field(repr=False)
    dependencies: Tuple[str, ...] = attr.field(default=(), converter=_to_tokens)

    @factory.validator
    def _check_factory(self, attribute, value):
        if not callable(value):
            raise TypeError(f"factory for {self.kind} {self.name!r} must be callable")

    @classmethod
    def value(cls, name: str, value: Any) -> "Definition":
        return cls(Kind.VALUE, name, lambda: value)

    def __str__(self) -> str:
        if self.dependencies:
            return f"{self.kind}({self.name}: {', '.join(self.dependencies)})"
        return f"{self.kind}({self.name})"
