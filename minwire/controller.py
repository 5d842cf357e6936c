"""Builds controller instances: one fresh instance per call, bound to one anchor element."""
import logging
import weakref
from typing import Any, List, Optional, Tuple

from .errors import InvalidDependencyKind, MissingElementArgument
from .events import EventBinder, EventBindings
from .injector import Injector
from .model import Kind
from .types import Anchor, Element

LOG = logging.getLogger(__name__)


def _split_anchor(name: str, args: Tuple[Any, ...]) -> Tuple[Element, List[Any]]:
    """Find the single Anchor in args; return its element and args with it unwrapped in place."""
    positions = [i for i, arg in enumerate(args) if isinstance(arg, Anchor)]
    if len(positions) != 1:
        raise MissingElementArgument(
            f"instantiate({name!r}) needs exactly one anchor element argument, got {len(positions)}"
        )
    element = args[positions[0]].element
    forwarded = list(args)
    forwarded[positions[0]] = element
    return element, forwarded


class ControllerFactory:
    """Instantiates registered controllers and binds their events."""

    def __init__(self, injector: Injector, binder: Optional[EventBinder] = None) -> None:
        self._injector = injector
        self._binder = binder or EventBinder()
        # keyed by id(instance) so controllers need not be hashable or weakly referenceable;
        # an entry lives as long as its listeners, which keep the instance (and its id) alive
        self._bindings: "weakref.WeakValueDictionary[int, EventBindings]" = (
            weakref.WeakValueDictionary()
        )

    @property
    def injector(self) -> Injector:
        return self._injector

    def instantiate(self, name: str, *args: Any) -> Any:
        """Create a new instance of the controller registered under name.

        Parameters:
            name: the registered controller name.
            args: extra constructor arguments; exactly one must be an Anchor
                (see minwire.anchor). It is passed on as the bare element at
                the same position.
        Returns:
            The new controller instance, its events already bound.
        Raises:
            MissingElementArgument: args do not hold exactly one Anchor.
            UnknownDependency: the controller or one of its dependencies is not registered.
            InvalidDependencyKind: name is not a controller, or a dependency is one.
            CircularDependency: a dependency (transitively) depends on itself.
        """
        element, forwarded = _split_anchor(name, args)

        definition = self._injector.registry.lookup(name)
        if definition.kind is not Kind.CONTROLLER:
            raise InvalidDependencyKind(name, definition.kind, expected="a controller")

        dependencies = self._injector.resolve(definition.dependencies, requester=name)
        constructor = definition.factory(*dependencies)
        instance = constructor(*dependencies, *forwarded)
        LOG.debug("instantiated %s on %s", definition, element)

        bindings = self._binder.bind(instance, element)
        if len(bindings):
            self._bindings[id(instance)] = bindings
        return instance

    def bindings_of(self, instance: Any) -> Optional[EventBindings]:
        """The event bindings still attached for a controller instance, if any."""
        bindings = self._bindings.get(id(instance))
        if bindings is None or bindings.instance is not instance:
            return None
        return bindings

    def release(self, instance: Any) -> bool:
        """Remove the listeners bound for instance.

        Returns:
            True if the instance had listeners to remove.
        """
        bindings = self.bindings_of(instance)
        if bindings is None:
            return False
        del self._bindings[id(instance)]
        if not len(bindings):
            return False
        bindings.unbind()
        return True
