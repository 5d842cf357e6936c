from typing import Any, Callable, Iterable, Optional, TypeVar

import attr
from typing_extensions import Protocol, TypeAlias, runtime_checkable

E = TypeVar("E", bound="Element")


@runtime_checkable
class Event(Protocol):
    """
    The parts of a native event object the event binder relies on. Host adapters
    wrap their platform's event so that `stop_propagation` flips `propagation_stopped`.
    """

    type: str
    target: "Element"

    @property
    def propagation_stopped(self) -> bool: ...

    def stop_propagation(self) -> None: ...

    def prevent_default(self) -> None: ...


Listener: TypeAlias = Callable[[Event], Any]


@runtime_checkable
class Element(Protocol):
    """
    Capability surface of a DOM element. minwire never creates or mutates
    elements, it only queries them and attaches listeners.
    """

    @property
    def parent(self) -> "Optional[Element]": ...

    def matches(self, selector: str) -> bool: ...

    def query_all(self, selector: str) -> "Iterable[Element]": ...

    def get_attribute(self, name: str) -> Optional[str]: ...

    def add_event_listener(self, event_type: str, listener: Listener) -> None: ...

    def remove_event_listener(self, event_type: str, listener: Listener) -> None: ...


@attr.frozen
class Anchor:
    """Marks the argument of `instantiate` that is the controller's root element."""

    element: Element


def anchor(element: E) -> Anchor:
    """Tag an element as the anchor of a controller instance."""
    return Anchor(element)
