"""Page scan: attach controllers to every element carrying the marker attribute."""
import logging
from typing import TYPE_CHECKING, Any, List

from .config import DEFAULT_MARKER_ATTRIBUTE
from .types import Element, anchor

if TYPE_CHECKING:
    from .runtime import Runtime

LOG = logging.getLogger(__name__)


def marked_elements(root: Element, attribute: str = DEFAULT_MARKER_ATTRIBUTE) -> List[Element]:
    """root (if marked) followed by its marked descendants, in document order."""
    found = list(root.query_all(f"[{attribute}]"))
    if root.get_attribute(attribute) is not None and root not in found:
        found.insert(0, root)
    return found


def bootstrap(
    runtime: "Runtime", root: Element, attribute: str = DEFAULT_MARKER_ATTRIBUTE
) -> List[Any]:
    """For each element E under root carrying attribute, call instantiate(E[attribute], anchor(E)).

    Returns:
        The created controller instances, in document order.
    """
    instances = []
    for element in marked_elements(root, attribute):
        name = (element.get_attribute(attribute) or "").strip()
        if not name:
            LOG.debug("skipping %s: empty %s", element, attribute)
            continue
        instances.append(runtime.instantiate(name, anchor(element)))
    LOG.debug("bootstrapped %d controllers under %s", len(instances), root)
    return instances
