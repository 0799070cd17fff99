"""
Basic Dependency Injection Example

This example demonstrates Stillhouse's fundamental concepts:
- Defining providers with tokens attached
- Injecting dependencies inside async factories
- Group tokens collecting contributions from several modules
- Lazy injection for a legitimate construction cycle

Run this example:
    python examples/01_basic_usage.py
"""

import asyncio
import logging

from stillhouse import (
    create_container,
    create_group_token,
    create_module,
    define_provider,
    define_static_provider,
)


# Step 1: Define Your Providers
# =============================

settings = define_static_provider({"greeting": "Hello"}, "settings")


@define_provider
def logger(injector):
    """A logging service."""
    return logging.getLogger("example")


class Greeter:
    def __init__(self, greeting: str, log: logging.Logger):
        self.greeting = greeting
        self.log = log

    def greet(self, name: str) -> str:
        message = f"{self.greeting}, {name}!"
        self.log.info(message)
        return message


@define_provider
async def greeter(injector):
    """A service that depends on settings and logger."""
    config = await injector.inject(settings)
    return Greeter(config["greeting"], await injector.inject(logger))


# Step 2: Multi-binding with Group Tokens
# =======================================

Commands = create_group_token("commands")

core_commands = create_module("core").provide(Commands, lambda injector: "help")
extra_commands = create_module("extras").provide(Commands, lambda injector: "version")


# Step 3: Breaking a Cycle with Lazy Injection
# ============================================

class EventBus:
    def __init__(self, handlers):
        self._handlers = handlers

    def publish(self, event: str) -> list[str]:
        return [f"{handler.name} got {event}" for handler in self._handlers.value]


class AuditHandler:
    name = "audit"

    def __init__(self, bus: EventBus):
        self.bus = bus


Handlers = create_group_token("handlers")


@define_provider
def event_bus(injector):
    # Handlers need the bus, so read them only after construction
    return EventBus(injector.inject_lazy(Handlers))


async def audit_handler(injector):
    return AuditHandler(await injector.inject(event_bus))


# Step 4: Wire Everything Together
# ================================

async def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    container = (
        create_container("example")
        .provide(settings)
        .provide(logger)
        .provide(greeter)
        .provide(event_bus)
        .provide(Handlers, audit_handler)
        .import_module(core_commands)
        .import_module(extra_commands)
    )

    service = await container.inject(greeter)
    print(service.greet("World"))

    print("Commands:", await container.inject(Commands))

    bus = await container.inject(event_bus)
    print(bus.publish("startup"))


if __name__ == "__main__":
    asyncio.run(main())
