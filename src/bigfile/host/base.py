"""Host editor interface.

The host owns documents, their side-table variables, buffer-local options,
commands and the event loop. bigfile only talks to the editor through this
interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Optional


@dataclass(frozen=True)
class Event:
    """An event fired by the host."""

    name: str
    document_id: Hashable
    path: str | None = None
    data: dict = field(default_factory=dict)


EventCallback = Callable[[Event], None]


@dataclass(eq=False)
class Subscription:
    """A registered event callback.

    Subscriptions scoped to a document only see that document's events.
    A once subscription is removed by the host after its first invocation.
    """

    event: str
    callback: EventCallback
    patterns: tuple[str, ...] = ("*",)
    document_id: Hashable | None = None
    once: bool = False
    group: str | None = None
    description: str | None = None
    fired: int = 0
    active: bool = True

    def cancel(self) -> None:
        """Stop delivering events to this subscription."""
        self.active = False


class Host(ABC):
    """Abstract base class for host editors."""

    @abstractmethod
    def get_document_size(self, document_id: Hashable) -> Optional[int]:
        """Byte size of the resource backing a document.

        Args:
            document_id: Document identity.

        Returns:
            Size in bytes, or None if the document has no backing resource.

        Raises:
            OSError: If the backing resource cannot be stat'ed.
        """
        pass

    @abstractmethod
    def get_var(self, document_id: Hashable, name: str) -> Any:
        """Read a document side-table variable.

        Raises:
            KeyError: If the variable is not set.
        """
        pass

    @abstractmethod
    def set_var(self, document_id: Hashable, name: str, value: Any) -> None:
        """Write a document side-table variable."""
        pass

    @abstractmethod
    def set_option(self, document_id: Hashable, name: str, value: Any) -> None:
        """Set a document-local editor option."""
        pass

    @abstractmethod
    def run_command(self, document_id: Hashable, command: str) -> None:
        """Run an editor command in the context of a document."""
        pass

    @abstractmethod
    def subscribe(
        self,
        event: str,
        callback: EventCallback,
        *,
        patterns: tuple[str, ...] = ("*",),
        document_id: Hashable | None = None,
        once: bool = False,
        group: str | None = None,
        description: str | None = None,
    ) -> Subscription:
        """Register a callback for a host event.

        Args:
            event: Event name.
            callback: Called with the Event.
            patterns: Globs matched against the document path.
            document_id: Restrict delivery to one document.
            once: Remove the subscription after its first invocation.
            group: Group name, for clearing related subscriptions together.
            description: Shown by the host when listing subscriptions.

        Returns:
            The registered Subscription.
        """
        pass

    @abstractmethod
    def clear_group(self, group: str) -> None:
        """Cancel every subscription in a group."""
        pass
