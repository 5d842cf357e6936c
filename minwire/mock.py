from typing import Any, Callable, Dict, Optional, Union
from unittest.mock import MagicMock

from typing_extensions import TypeAlias

from .controller import ControllerFactory
from .injector import Injector
from .registry import Registry
from .runtime import Runtime

MockingFunction: TypeAlias = Callable[[str], Any]

DEFAULT_MOCKING_FUNCTION: MockingFunction = lambda token: MagicMock(name=token)


class _MockInjector(Injector):
    """Resolves every token to a mock, without looking at (or building) services."""

    def __init__(self, registry: Registry, mocking_function: MockingFunction) -> None:
        super().__init__(registry)
        self._mocking_function = mocking_function
        self.mocks: Dict[str, Any] = {}

    def _resolve_one(self, token: str, requester: Optional[str]) -> Any:
        if token not in self.mocks:
            self.mocks[token] = self._mocking_function(token)
        return self.mocks[token]


def mock(
    source: Union[Runtime, Registry],
    name: str,
    *args: Any,
    mocking_function: Optional[MockingFunction] = None,
) -> Any:
    """
    Instantiate the controller registered under name with every dependency
    replaced by mocking_function(token). Events are bound as usual, so args
    must still contain an anchor element. No service is constructed.
    """
    registry = source.registry if isinstance(source, Runtime) else source
    injector = _MockInjector(registry, mocking_function or DEFAULT_MOCKING_FUNCTION)
    return ControllerFactory(injector).instantiate(name, *args)
