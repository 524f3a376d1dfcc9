"""In-memory host for embedding bigfile without an editor."""

from __future__ import annotations

import fnmatch
import itertools
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Hashable, Optional

from bigfile.constants import DOCUMENT_POST_READ, DOCUMENT_PRE_READ
from bigfile.host.base import Event, EventCallback, Host, Subscription

logger = logging.getLogger(__name__)


@dataclass
class Document:
    """A document open in the in-memory host.

    When size is None the size is read from the file at path.
    """

    id: int
    path: str
    size: int | None = None
    vars: dict[str, Any] = field(default_factory=dict)
    options: dict[str, Any] = field(default_factory=dict)
    commands: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class HandlerError:
    """An exception raised by a subscription callback."""

    event: str
    document_id: Hashable
    description: str | None
    error: Exception


class InMemoryHost(Host):
    """Host that keeps documents and subscriptions in memory.

    Events are delivered synchronously in subscription order. Exceptions
    raised by callbacks are logged and recorded in errors; they never stop
    delivery to the remaining subscriptions.
    """

    def __init__(self):
        self.documents: dict[int, Document] = {}
        self.subscriptions: list[Subscription] = []
        self.errors: list[HandlerError] = []
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def add_document(self, path: str | Path, size: int | None = None) -> int:
        """Register a document without firing any events."""
        document_id = next(self._ids)
        self.documents[document_id] = Document(id=document_id, path=str(path), size=size)
        return document_id

    def open_document(self, path: str | Path, size: int | None = None) -> int:
        """Open a document, firing the pre-read then post-read events.

        Args:
            path: Document path, matched against subscription globs.
            size: Byte size. If None, the file at path is stat'ed.

        Returns:
            The new document id.
        """
        document_id = self.add_document(path, size)
        self.emit(DOCUMENT_PRE_READ, document_id)
        self.emit(DOCUMENT_POST_READ, document_id)
        return document_id

    def close_document(self, document_id: int) -> None:
        """Forget a document and drop subscriptions scoped to it."""
        self.documents.pop(document_id, None)
        for subscription in self.subscriptions:
            if subscription.document_id == document_id:
                subscription.cancel()
        self._prune()

    def _document(self, document_id: Hashable) -> Document:
        try:
            return self.documents[document_id]  # type: ignore[index]
        except KeyError:
            raise LookupError(f"Unknown document: {document_id!r}") from None

    # ------------------------------------------------------------------
    # Host interface
    # ------------------------------------------------------------------

    def get_document_size(self, document_id: Hashable) -> Optional[int]:
        document = self._document(document_id)
        if document.size is not None:
            return document.size
        if not document.path:
            return None
        return Path(document.path).stat().st_size

    def get_var(self, document_id: Hashable, name: str) -> Any:
        return self._document(document_id).vars[name]

    def set_var(self, document_id: Hashable, name: str, value: Any) -> None:
        self._document(document_id).vars[name] = value

    def set_option(self, document_id: Hashable, name: str, value: Any) -> None:
        self._document(document_id).options[name] = value

    def run_command(self, document_id: Hashable, command: str) -> None:
        self._document(document_id).commands.append(command)

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
        subscription = Subscription(
            event=event,
            callback=callback,
            patterns=tuple(patterns),
            document_id=document_id,
            once=once,
            group=group,
            description=description,
        )
        self.subscriptions.append(subscription)
        return subscription

    def clear_group(self, group: str) -> None:
        for subscription in self.subscriptions:
            if subscription.group == group:
                subscription.cancel()
        self._prune()

    # ------------------------------------------------------------------
    # Event delivery
    # ------------------------------------------------------------------

    def _matches(self, subscription: Subscription, event: Event) -> bool:
        if not subscription.active or subscription.event != event.name:
            return False
        if subscription.document_id is not None:
            return subscription.document_id == event.document_id
        path = event.path or ""
        return any(
            fnmatch.fnmatch(path, pattern) or fnmatch.fnmatch(Path(path).name, pattern)
            for pattern in subscription.patterns
        )

    def emit(self, event_name: str, document_id: int, **data: Any) -> Event:
        """Fire an event for a document.

        Subscriptions registered while the event is being delivered do not
        see it.

        Args:
            event_name: Event name.
            document_id: Document the event concerns.
            **data: Event payload.

        Returns:
            The delivered Event.
        """
        document = self._document(document_id)
        event = Event(name=event_name, document_id=document_id, path=document.path, data=data)

        for subscription in list(self.subscriptions):
            if not self._matches(subscription, event):
                continue
            if subscription.once:
                subscription.cancel()
            subscription.fired += 1
            try:
                subscription.callback(event)
            except Exception as e:
                logger.exception(
                    f"Error in {event_name} handler for document {document_id}"
                    f" ({subscription.description or subscription.callback!r})"
                )
                self.errors.append(
                    HandlerError(
                        event=event_name,
                        document_id=document_id,
                        description=subscription.description,
                        error=e,
                    )
                )

        self._prune()
        return event

    def _prune(self) -> None:
        self.subscriptions = [s for s in self.subscriptions if s.active]
