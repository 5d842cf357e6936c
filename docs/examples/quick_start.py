import minwire

# Initialize a runtime. Config values are registered as named constants.
runtime = minwire.initialize({"values": {"greeting": "Bonjour"}})


# Services are built once, the first time something needs them.
@runtime.register_service("greeter", ["greeting"])
class Greeter:
    def __init__(self, greeting: str):
        self.greeting = greeting

    def greet(self, name: str) -> str:
        return f"{self.greeting}, {name}!"


# Service factories can also be plain functions that fill in a fresh instance.
@runtime.register_service("log")
def log(this):
    this.lines = []


# A controller factory receives the resolved dependencies and returns a class.
@runtime.register_controller("hello", ["greeter", "log"])
def hello(greeter, log):
    class Hello:
        events = {"click": "on_click", ".name click": "on_name_click"}

        def __init__(self, greeter, log, element, name):
            self.greeter = greeter
            self.log = log
            self.element = element
            self.name = name

        def on_click(self, event):
            self.log.lines.append("clicked")

        def on_name_click(self, event):
            self.log.lines.append(self.greeter.greet(self.name))

    return Hello


class Element:
    """Just enough of an element for this example."""

    def __init__(self, cls="", parent=None):
        self.cls = cls
        self.parent = parent
        self.listeners = {}

    def matches(self, selector):
        return selector == "." + self.cls

    def query_all(self, selector):
        return []

    def get_attribute(self, name):
        return None

    def add_event_listener(self, event_type, listener):
        self.listeners.setdefault(event_type, []).append(listener)

    def remove_event_listener(self, event_type, listener):
        self.listeners[event_type].remove(listener)


class Click:
    type = "click"
    propagation_stopped = False

    def __init__(self, target):
        self.target = target

    def stop_propagation(self):
        self.propagation_stopped = True

    def prevent_default(self):
        pass


if __name__ == "__main__":
    root = Element()
    label = Element("name", parent=root)

    # the anchor element is passed on at the position it is given
    controller = runtime.instantiate("hello", minwire.anchor(root), "Marie")

    # a click on the label bubbles up to the root, where the listener lives
    for listener in root.listeners["click"]:
        listener(Click(label))

    assert controller.log.lines == ["Bonjour, Marie!", "clicked"]
    assert controller.log is runtime.resolve(["log"])[0], "services are shared"
    print("quick start example passed!")
