"""The Injector turns dependency tokens into values, building each service at most once."""
import logging
import types
from threading import RLock
from typing import Any, Dict, Iterable, List, Optional

from .errors import CircularDependency, InvalidDependencyKind
from .model import Definition, Kind
from .registry import Registry, _synchronized

LOG = logging.getLogger(__name__)


def _build_service(definition: Definition, dependencies: List[Any]) -> Any:
    factory = definition.factory
    if isinstance(factory, type):
        return factory(*dependencies)

    # plain function factories fill in a fresh instance, their return value is ignored
    obj = types.SimpleNamespace()
    factory(obj, *dependencies)
    return obj


class Injector:
    """Resolves dependency tokens against a Registry.

    Services are constructed lazily, on the first resolution that reaches them,
    and memoized for the lifetime of the injector. A service that no resolution
    reaches is never constructed.
    """

    def __init__(self, registry: Registry) -> None:
        self._registry = registry
        self._instances: Dict[str, Any] = {}
        # names of services whose construction has started but not finished, outermost first
        self._constructing: List[str] = []
        self._lock = RLock()

    @property
    def registry(self) -> Registry:
        return self._registry

    @_synchronized
    def resolve(self, tokens: Iterable[str], requester: Optional[str] = None) -> List[Any]:
        """Resolve tokens into values, in the same order.

        Parameters:
            tokens: names of registered values or services.
            requester: the name of whatever needs the values, reported on failure.
        Returns:
            The resolved values, one per token.
        Raises:
            UnknownDependency: a token is not registered.
            InvalidDependencyKind: a token names a controller.
            CircularDependency: a service (transitively) depends on itself.
        """
        return [self._resolve_one(token, requester) for token in tokens]

    def get(self, token: str) -> Any:
        """Resolve a single token."""
        return self.resolve([token])[0]

    def _resolve_one(self, token: str, requester: Optional[str]) -> Any:
        if token in self._instances:
            return self._instances[token]

        definition = self._registry.lookup(token, requester)
        if definition.kind is Kind.VALUE:
            return definition.factory()
        if definition.kind is Kind.SERVICE:
            return self._construct(definition)
        raise InvalidDependencyKind(token, definition.kind)

    def _construct(self, definition: Definition) -> Any:
        name = definition.name
        if name in self._constructing:
            path = self._constructing[self._constructing.index(name) :] + [name]
            raise CircularDependency(path)

        LOG.debug("constructing %s", definition)
        self._constructing.append(name)
        try:
            dependencies = self.resolve(definition.dependencies, requester=name)
            obj = _build_service(definition, dependencies)
        finally:
            self._constructing.pop()

        # only memoized once fully built, a failed factory leaves nothing behind
        self._instances[name] = obj
        return obj

    @_synchronized
    def instances(self) -> List[str]:
        """Names of the services constructed so far, in construction order."""
        return list(self._instances)

    @_synchronized
    def __contains__(self, name: object) -> bool:
        return name in self._instances
