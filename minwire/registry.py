"""The Registry stores named definitions; it never builds anything itself."""
import functools
import logging
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar, overload

from typing_extensions import Concatenate, ParamSpec

from .errors import UnknownDependency
from .model import Definition, Kind

LOG = logging.getLogger(__name__)

S = TypeVar("S")
R = TypeVar("R")
P = ParamSpec("P")
F = TypeVar("F", bound=Callable[..., Any])


def _synchronized(func: Callable[Concatenate[S, P], R]) -> Callable[Concatenate[S, P], R]:
    """Decorator to synchronize method access with the instance's reentrant lock."""

    @functools.wraps(func)
    def wrapper(self: S, *args: P.args, **kwargs: P.kwargs) -> R:
        with self._lock:  # type: ignore[attr-defined]
            return func(self, *args, **kwargs)

    return wrapper


class Registry:
    """Tracks named value, service and controller definitions.

    Names share one namespace across all kinds. Registering a name again
    replaces the earlier definition.
    """

    def __init__(self) -> None:
        self._by_name: Dict[str, Definition] = {}
        self._lock = RLock()

    @overload
    def define(self, kind: Kind, name: str, dependencies_or_factory: F) -> F: ...

    @overload
    def define(
        self, kind: Kind, name: str, dependencies_or_factory: Sequence[str], factory: F
    ) -> F: ...

    @overload
    def define(
        self, kind: Kind, name: str, dependencies_or_factory: Optional[Sequence[str]] = None
    ) -> Callable[[F], F]: ...

    def define(self, kind, name, dependencies_or_factory=None, factory=None):
        """Store a definition.

        Accepts `define(kind, name, factory)` for a definition without
        dependencies and `define(kind, name, ["dep", ...], factory)` otherwise.
        When no factory is given a decorator is returned which registers the
        decorated callable.

        Returns:
            The factory (or the decorator).
        """
        if factory is None and callable(dependencies_or_factory):
            factory, dependencies = dependencies_or_factory, ()
        else:
            dependencies = dependencies_or_factory or ()

        if factory is None:

            def wrap(func: F) -> F:
                self._store(Definition(kind, name, func, dependencies))
                return func

            return wrap

        self._store(Definition(kind, name, factory, dependencies))
        return factory

    def register_value(self, name: str, value: Any) -> None:
        """Register a constant under a name."""
        self._store(Definition.value(name, value))

    def register_service(self, name: str, dependencies_or_factory=None, factory=None):
        """Register a lazily built, shared service. See `define` for the accepted forms."""
        return self.define(Kind.SERVICE, name, dependencies_or_factory, factory)

    def register_controller(self, name: str, dependencies_or_factory=None, factory=None):
        """Register a controller factory. See `define` for the accepted forms."""
        return self.define(Kind.CONTROLLER, name, dependencies_or_factory, factory)

    @_synchronized
    def _store(self, definition: Definition) -> None:
        previous = self._by_name.get(definition.name)
        if previous is not None:
            LOG.debug("replacing %s with %s", previous, definition)
        else:
            LOG.debug("registering %s", definition)
        self._by_name[definition.name] = definition

    @_synchronized
    def lookup(self, name: str, requester: Optional[str] = None) -> Definition:
        """Get a definition by name.

        Parameters:
            name: the registered name.
            requester: the name of whatever needs the definition, reported on failure.
        Raises:
            UnknownDependency: if nothing is registered under name.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownDependency(name, requester) from None

    @_synchronized
    def names(self) -> List[str]:
        return list(self._by_name)

    @_synchronized
    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @_synchronized
    def __len__(self) -> int:
        return len(self._by_name)
