"""Host editor boundary."""

from bigfile.host.base import Event, EventCallback, Host, Subscription
from bigfile.host.memory import Document, HandlerError, InMemoryHost

__all__ = [
    "Event",
    "EventCallback",
    "Host",
    "Subscription",
    "Document",
    "HandlerError",
    "InMemoryHost",
]
