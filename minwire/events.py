"""Declarative event binding for controller instances.

A controller class declares which events it handles with an `events` mapping:

class TodoList:
    events = {
        "click": "on_click",              # the anchor element itself
        ".item click": "on_item_click",   # any current or future descendant matching .item
    }

Keys are "[selector ]event_type"; everything before the last space is a
selector. Values are names of methods on the controller class. The parsed
table is built once per class and handlers always run with the controller
instance as receiver.
"""
import logging
import weakref
from typing import Any, Callable, Dict, List, Optional, Tuple

import attr

from .errors import InvalidEventKey, UnknownHandler
from .types import Element, Event, Listener

LOG = logging.getLogger(__name__)

EVENTS_ATTR = "events"
# parsed tables by exact class; weak so that classes built per factory call can be collected
_EVENT_TABLES: "weakref.WeakKeyDictionary[type, Tuple[EventEntry, ...]]" = (
    weakref.WeakKeyDictionary()
)


@attr.frozen
class EventEntry:
    """One parsed event map entry."""

    selector: Optional[str]
    event_type: str
    handler_name: str
    handler: Callable[[Any, Event], Any] = attr.field(eq=False, repr=False)


def parse_key(key: str) -> Tuple[Optional[str], str]:
    """Split an event map key into (selector, event_type); selector is None if absent."""
    parts = key.rsplit(None, 1)
    if not parts:
        raise InvalidEventKey(f"empty event key {key!r}")
    if len(parts) == 1:
        return None, parts[0]
    return parts[0].strip(), parts[1]


def _build_table(cls: type) -> Tuple[EventEntry, ...]:
    declared: Dict[str, str] = getattr(cls, EVENTS_ATTR, None) or {}
    entries = []
    for key, handler_name in declared.items():
        selector, event_type = parse_key(key)
        handler = getattr(cls, handler_name, None)
        if not callable(handler):
            raise UnknownHandler(
                f"{cls.__name__} has no handler method {handler_name!r} (for {key!r})"
            )
        entries.append(EventEntry(selector, event_type, handler_name, handler))
    return tuple(entries)


def event_table(cls: type) -> Tuple[EventEntry, ...]:
    """
    Get the parsed event table of a controller class, building it the first
    time. Subclasses get their own table.
    """
    table = _EVENT_TABLES.get(cls)
    if table is None:
        table = _build_table(cls)
        _EVENT_TABLES[cls] = table
    return table


def _delegation_path(target: Optional[Element], root: Element) -> List[Element]:
    """Elements from target up to (not including) root; empty if target is not below root."""
    path = []
    node = target
    while node is not None and node is not root:
        path.append(node)
        node = node.parent
    return path if node is root else []


class _Dispatcher:
    """The single native listener attached to the root for one event type."""

    def __init__(
        self,
        bindings: "EventBindings",
        delegated: List[EventEntry],
        direct: List[EventEntry],
    ) -> None:
        # the element's listener list keeps the bindings (and the instance) alive
        self._bindings = bindings
        self._delegated = delegated
        self._direct = direct

    def __call__(self, event: Event) -> None:
        # stopped by an earlier listener, possibly another controller on the same root
        if event.propagation_stopped:
            return

        instance = self._bindings.instance
        if self._delegated:
            pending = list(self._delegated)
            for element in _delegation_path(event.target, self._bindings.root):
                matched = [entry for entry in pending if element.matches(entry.selector)]
                for entry in matched:
                    pending.remove(entry)
                    entry.handler(instance, event)
                if event.propagation_stopped:
                    return
                if not pending:
                    break

        for entry in self._direct:
            entry.handler(instance, event)


class EventBindings:
    """Listeners attached to one root element for one controller instance."""

    def __init__(self, instance: Any, root: Element) -> None:
        self.instance = instance
        self.root = root
        self._listeners: List[Tuple[str, Listener]] = []

    def _add(self, event_type: str, listener: Listener) -> None:
        self.root.add_event_listener(event_type, listener)
        self._listeners.append((event_type, listener))

    @property
    def event_types(self) -> List[str]:
        return [event_type for event_type, _ in self._listeners]

    def unbind(self) -> None:
        """Remove every listener. Safe to call more than once."""
        while self._listeners:
            event_type, listener = self._listeners.pop()
            self.root.remove_event_listener(event_type, listener)

    def __len__(self) -> int:
        return len(self._listeners)


class EventBinder:
    """Attaches the listeners declared by a controller's event map."""

    def bind(self, instance: Any, root: Element) -> EventBindings:
        """Attach one listener per event type on root, dispatching to instance's handlers.

        Raises:
            InvalidEventKey: an event map key has no event type.
            UnknownHandler: an event map names a method the class does not have.
        """
        bindings = EventBindings(instance, root)
        by_type: Dict[str, Tuple[List[EventEntry], List[EventEntry]]] = {}
        for entry in event_table(type(instance)):
            delegated, direct = by_type.setdefault(entry.event_type, ([], []))
            (direct if entry.selector is None else delegated).append(entry)

        for event_type, (delegated, direct) in by_type.items():
            LOG.debug(
                "binding %s on %s for %s (%d delegated, %d direct)",
                event_type,
                root,
                type(instance).__name__,
                len(delegated),
                len(direct),
            )
            bindings._add(event_type, _Dispatcher(bindings, delegated, direct))
        return bindings
