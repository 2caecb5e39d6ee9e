"""Testing fakes: in-memory doubles for the engine's ports."""
from mp_appsec.testing.fakes.stores import InMemoryRoleStore, InMemoryUserStore
from mp_appsec.testing.fakes.sync import InMemorySyncTransport, Notification, Publication

__all__ = [
    "InMemoryRoleStore",
    "InMemorySyncTransport",
    "InMemoryUserStore",
    "Notification",
    "Publication",
]
