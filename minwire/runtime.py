"""A Runtime ties a Registry, an Injector and a ControllerFactory together."""
import logging
from typing import Any, Iterable, List, Optional

from .bootstrap import bootstrap
from .config import RuntimeConfigWrapper, RuntimeInitConfig
from .controller import ControllerFactory
from .events import EventBinder
from .injector import Injector
from .registry import Registry
from .types import Element

LOG = logging.getLogger(__name__)


def initialize(config: Optional[RuntimeInitConfig] = None) -> "Runtime":
    """Initialize a new runtime instance."""
    LOG.debug("initializing a new runtime instance")
    return Runtime(config)


class Runtime:
    """Registers definitions and builds controllers from them.

    Each runtime has its own registry and its own service instances; two
    runtimes never share state.
    """

    def __init__(
        self, config: Optional[RuntimeInitConfig] = None, registry: Optional[Registry] = None
    ) -> None:
        self._config = RuntimeConfigWrapper()
        if config is not None:
            self._config._from_dict(config)

        self.registry = registry if registry is not None else Registry()
        self.injector = Injector(self.registry)
        self.controllers = ControllerFactory(self.injector, EventBinder())

        for name, value in self._config.values.items():
            self.registry.register_value(name, value)

    @property
    def config(self) -> RuntimeConfigWrapper:
        return self._config

    def register_value(self, name: str, value: Any) -> None:
        self.registry.register_value(name, value)

    def register_service(self, name: str, dependencies_or_factory=None, factory=None):
        return self.registry.register_service(name, dependencies_or_factory, factory)

    def register_controller(self, name: str, dependencies_or_factory=None, factory=None):
        return self.registry.register_controller(name, dependencies_or_factory, factory)

    def resolve(self, tokens: Iterable[str]) -> List[Any]:
        return self.injector.resolve(tokens)

    def instantiate(self, name: str, *args: Any) -> Any:
        return self.controllers.instantiate(name, *args)

    def release(self, instance: Any) -> bool:
        return self.controllers.release(instance)

    def bootstrap(self, root: Element) -> List[Any]:
        """Instantiate a controller for every marked element under root. See minwire.bootstrap."""
        return bootstrap(self, root, self._config.marker_attribute)
