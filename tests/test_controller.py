import gc
import unittest
from types import SimpleNamespace

import pytest

import minwire
from minwire.errors import InvalidDependencyKind, MissingElementArgument, UnknownDependency
from tests.dom_helpers import FakeElement


class Recorder:
    def __init__(self, *args):
        self.args = args


class ControllerTestCase(unittest.TestCase):
    def setUp(self):
        self.runtime = minwire.initialize()
        self.element = FakeElement("div")

    def test_argument_order(self) -> None:
        self.runtime.register_value("dep1", "D1")
        self.runtime.register_value("dep2", "D2")
        self.runtime.register_controller("c", ["dep1", "dep2"], lambda dep1, dep2: Recorder)

        instance = self.runtime.instantiate("c", "a", minwire.anchor(self.element), "b")

        self.assertEqual(("D1", "D2", "a", self.element, "b"), instance.args)

    def test_element_first(self) -> None:
        self.runtime.register_controller("c", lambda: Recorder)

        instance = self.runtime.instantiate("c", minwire.anchor(self.element), 1, 2)

        self.assertEqual((self.element, 1, 2), instance.args)

    def test_factory_receives_dependencies(self) -> None:
        seen = []
        self.runtime.register_value("config", {"debug": True})

        @self.runtime.register_controller("c", ["config"])
        def make(config):
            seen.append(config)
            return Recorder

        self.runtime.instantiate("c", minwire.anchor(self.element))
        self.runtime.instantiate("c", minwire.anchor(self.element))

        self.assertEqual([{"debug": True}, {"debug": True}], seen)

    def test_fresh_instance_each_time(self) -> None:
        self.runtime.register_controller("c", lambda: Recorder)
        other = FakeElement("div")

        first = self.runtime.instantiate("c", minwire.anchor(self.element))
        second = self.runtime.instantiate("c", minwire.anchor(other))

        self.assertIsNot(first, second)
        self.assertIs(self.element, first.args[0])
        self.assertIs(other, second.args[0])

    def test_factory_scope_is_fresh_per_call(self) -> None:
        @self.runtime.register_controller("counter")
        def counter():
            count = []

            class Counter:
                def __init__(self, element):
                    count.append(element)
                    self.count = len(count)

            return Counter

        first = self.runtime.instantiate("counter", minwire.anchor(self.element))
        second = self.runtime.instantiate("counter", minwire.anchor(self.element))

        self.assertEqual(1, first.count)
        self.assertEqual(1, second.count)

    def test_services_shared_across_controllers(self) -> None:
        built = []

        @self.runtime.register_service("store")
        def store(this):
            built.append(this)
            this.items = []

        self.runtime.register_controller("a", ["store"], lambda store: Recorder)
        self.runtime.register_controller("b", ["store"], lambda store: Recorder)

        a = self.runtime.instantiate("a", minwire.anchor(self.element))
        b = self.runtime.instantiate("b", minwire.anchor(self.element))
        a2 = self.runtime.instantiate("a", minwire.anchor(self.element))

        self.assertEqual(1, len(built))
        self.assertIs(a.args[0], b.args[0])
        self.assertIs(a.args[0], a2.args[0])

    def test_unrelated_service_never_built(self) -> None:
        side_effects = []
        self.runtime.register_service("noisy", lambda this: side_effects.append("built"))
        self.runtime.register_value("quiet", 1)
        self.runtime.register_controller("c", ["quiet"], lambda quiet: Recorder)

        self.runtime.instantiate("c", minwire.anchor(self.element))

        self.assertEqual([], side_effects)
        self.assertNotIn("noisy", self.runtime.injector)

    def test_unknown_controller(self) -> None:
        with self.assertRaises(UnknownDependency) as ctx:
            self.runtime.instantiate("nope", minwire.anchor(self.element))
        self.assertEqual("nope", ctx.exception.token)

    def test_unknown_dependency(self) -> None:
        constructed = []
        self.runtime.register_controller(
            "c", ["missing"], lambda missing: constructed.append(missing)
        )

        with self.assertRaises(UnknownDependency) as ctx:
            self.runtime.instantiate("c", minwire.anchor(self.element))

        self.assertEqual("missing", ctx.exception.token)
        self.assertEqual("c", ctx.exception.requester)
        self.assertEqual([], constructed)

    def test_not_a_controller(self) -> None:
        self.runtime.register_service("svc", lambda this: None)

        with self.assertRaises(InvalidDependencyKind):
            self.runtime.instantiate("svc", minwire.anchor(self.element))

    def test_controller_as_dependency(self) -> None:
        self.runtime.register_controller("inner", lambda: Recorder)
        self.runtime.register_controller("outer", ["inner"], lambda inner: Recorder)

        with self.assertRaises(InvalidDependencyKind) as ctx:
            self.runtime.instantiate("outer", minwire.anchor(self.element))
        self.assertEqual("inner", ctx.exception.token)


def test_missing_element_argument() -> None:
    runtime = minwire.initialize()
    built = []
    runtime.register_service("svc", lambda this: built.append(this))
    runtime.register_controller("c", ["svc"], lambda svc: Recorder)

    # a bare element is not enough, it has to be tagged
    with pytest.raises(MissingElementArgument):
        runtime.instantiate("c", FakeElement())

    # checked before any dependency is resolved
    assert built == []


def test_more_than_one_anchor() -> None:
    runtime = minwire.initialize()
    runtime.register_controller("c", lambda: Recorder)

    with pytest.raises(MissingElementArgument):
        runtime.instantiate("c", minwire.anchor(FakeElement()), minwire.anchor(FakeElement()))


def test_release_removes_listeners() -> None:
    class Clicky:
        events = {"click": "on_click", ".item focus": "on_focus"}

        def __init__(self, element):
            self.clicks = 0

        def on_click(self, event):
            self.clicks += 1

        def on_focus(self, event):
            pass

    runtime = minwire.initialize()
    runtime.register_controller("clicky", lambda: Clicky)
    element = FakeElement()

    instance = runtime.instantiate("clicky", minwire.anchor(element))
    assert element.listener_count() == 2
    assert sorted(runtime.controllers.bindings_of(instance).event_types) == ["click", "focus"]

    element.click()
    assert runtime.release(instance) is True
    element.click()

    assert instance.clicks == 1
    assert element.listener_count() == 0
    assert runtime.release(instance) is False


def test_release_without_events() -> None:
    runtime = minwire.initialize()
    runtime.register_controller("c", lambda: Recorder)

    instance = runtime.instantiate("c", minwire.anchor(FakeElement()))

    assert runtime.release(instance) is False
    assert runtime.release(object()) is False


class Slotted:
    __slots__ = ("clicks",)

    events = {"click": "on_click"}

    def __init__(self, element):
        self.clicks = 0

    def on_click(self, event):
        self.clicks += 1


def test_release_slotted_controller() -> None:
    runtime = minwire.initialize()
    runtime.register_controller("slotted", lambda: Slotted)
    element = FakeElement()

    instance = runtime.instantiate("slotted", minwire.anchor(element))
    released = runtime.release(instance)
    element.click()

    assert (released, element.listener_count(), instance.clicks) == (True, 0, 0)


def test_listeners_keep_controller_alive() -> None:
    seen = []

    class Tracker:
        events = {"click": "on_click"}

        def __init__(self, element):
            pass

        def on_click(self, event):
            seen.append(self)

    runtime = minwire.initialize()
    runtime.register_controller("tracker", lambda: Tracker)
    element = FakeElement()

    # the caller drops the instance straight away
    runtime.instantiate("tracker", minwire.anchor(element))
    gc.collect()
    element.click()
    element.click()

    assert len(seen) == 2
    assert seen[0] is seen[1]
    assert runtime.release(seen[0]) is True
    assert element.listener_count() == 0


def test_function_constructor_without_events() -> None:
    runtime = minwire.initialize()
    runtime.register_controller("plain", lambda: (lambda element: SimpleNamespace(element=element)))
    element = FakeElement()

    first = runtime.instantiate("plain", minwire.anchor(element))
    second = runtime.instantiate("plain", minwire.anchor(element))

    assert first.element is element
    assert first is not second
    assert element.listener_count() == 0
    assert runtime.release(first) is False
