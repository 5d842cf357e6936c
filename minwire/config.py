from typing import Any, Mapping, Optional, TypeVar, Union

from typing_extensions import TypedDict

T = TypeVar("T")

DEFAULT_MARKER_ATTRIBUTE = "data-controller"


class InternalRuntimeConfig(TypedDict, total=False):
    # Attribute whose value names the controller to attach to an element.
    marker_attribute: str
    # Constants registered as value definitions when the runtime is initialized.
    values: Mapping[str, Any]


RuntimeInitConfig = Union[Mapping[str, Any], InternalRuntimeConfig]


class RuntimeConfigWrapper:
    """Manages the configuration of a runtime."""

    def __init__(self):
        self._impl = {}

    def _from_dict(self, config_dict: RuntimeInitConfig):
        """Configure the runtime from a dictionary-like mapping.

        Parameters:
            config_dict: the configuration data to apply.
        """
        self._impl = config_dict

    def __contains__(self, key: str):
        return key in self._impl

    def get(self, key: str, default: Optional[T] = None) -> T:
        return self._impl.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Get a configured value; a key set to None is present and returns None."""
        return self._impl[key]

    @property
    def marker_attribute(self) -> str:
        return self.get("marker_attribute") or DEFAULT_MARKER_ATTRIBUTE

    @property
    def values(self) -> Mapping[str, Any]:
        return self.get("values") or {}
