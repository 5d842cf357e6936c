"""
minwire is a minimal component runtime: named services and controllers wired
together by dependency injection, plus declarative event binding with
selector delegation.

Register values, services and controllers on a runtime. Nothing is built
until a controller is instantiated:

import minwire

runtime = minwire.initialize({"values": {"api_url": "http://localhost"}})

@runtime.register_service("api", ["api_url"])
class Api:
    def __init__(self, url): ...

@runtime.register_controller("todo", ["api"])
def todo(api):
    class TodoList:
        events = {"click": "on_click", ".item click": "on_item_click"}

        def __init__(self, api, element):
            self.api = api
            self.element = element

        def on_click(self, event): ...

        def on_item_click(self, event): ...

    return TodoList

controller = runtime.instantiate("todo", minwire.anchor(element))

Services are built once per runtime, on first use, and shared by every
controller that needs them. Controllers are built fresh on every
instantiate() call. The element must be tagged with minwire.anchor() and is
passed to the controller class after the resolved dependencies, at the
position it was given among the extra arguments.

A service factory can be a class, called with its dependencies, or a plain
function called as factory(instance, *dependencies) that fills in a fresh
instance. Its return value is ignored.
"""

__version__ = "1.0.0"

from .bootstrap import bootstrap
from .errors import (
    CircularDependency,
    InvalidDependencyKind,
    InvalidEventKey,
    MinwireError,
    MissingElementArgument,
    UnknownDependency,
    UnknownHandler,
)
from .model import Definition, Kind
from .registry import Registry
from .runtime import Runtime, initialize
from .types import Anchor, Element, Event, anchor

__all__ = [
    "anchor",
    "Anchor",
    "bootstrap",
    "CircularDependency",
    "Definition",
    "Element",
    "Event",
    "initialize",
    "InvalidDependencyKind",
    "InvalidEventKey",
    "Kind",
    "MinwireError",
    "MissingElementArgument",
    "Registry",
    "Runtime",
    "UnknownDependency",
    "UnknownHandler",
]
