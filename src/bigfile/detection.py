"""Per-document big file detection.

The detector runs once per document when the host is about to read it:
it classifies the document by size, records the verdict in the document's
side-table and, for big documents, disables the configured features.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Hashable

from bigfile.config import Config
from bigfile.constants import DETECTED_VAR
from bigfile.dispatch import dispatch
from bigfile.features.registry import FeatureRegistry
from bigfile.host.base import Event, Host
from bigfile.sizing import get_document_size, is_big_file

logger = logging.getLogger(__name__)


class DocumentState(Enum):
    """Detection state of a document."""

    UNSET = None
    NOT_BIG = 0
    BIG = 1


def document_state(host: Host, document_id: Hashable) -> DocumentState:
    """Read the detection state recorded for a document.

    Args:
        host: Host owning the document.
        document_id: Document identity.

    Returns:
        UNSET if detection has not run for the document yet. Any recorded
        value other than 0 counts as BIG.
    """
    try:
        value = host.get_var(document_id, DETECTED_VAR)
    except KeyError:
        return DocumentState.UNSET
    if value is None:
        return DocumentState.UNSET
    if value == DocumentState.NOT_BIG.value:
        return DocumentState.NOT_BIG
    return DocumentState.BIG


class BigFileDetector:
    """Runs detection for documents as they are opened.

    Args:
        config: Shared, read-only configuration.
        registry: Registry resolving config.features.
        host: Host owning the documents.
    """

    def __init__(self, config: Config, registry: FeatureRegistry, host: Host):
        self.config = config
        self.registry = registry
        self.host = host

    def on_document_open(self, document_id: Hashable) -> DocumentState:
        """Classify a document and disable features if it is big.

        Detection runs at most once per document. Later calls return the
        recorded state without doing anything.

        Args:
            document_id: Document being opened.

        Returns:
            The document's detection state.

        Raises:
            UnknownFeatureError: If a configured feature is not registered.
        """
        state = document_state(self.host, document_id)
        if state is not DocumentState.UNSET:
            return state

        size = get_document_size(self.host, document_id)
        if not is_big_file(size, self.config, document_id):
            logger.debug(f"Document {document_id} is not big ({size or 0} bytes)")
            self.host.set_var(document_id, DETECTED_VAR, DocumentState.NOT_BIG.value)
            return DocumentState.NOT_BIG

        self.host.set_var(document_id, DETECTED_VAR, DocumentState.BIG.value)
        logger.info(
            f"Document {document_id} is a big file ({size or 0} bytes), "
            f"disabling: {', '.join(self.config.features) or 'nothing'}"
        )

        features = self.registry.resolve(self.config.features)
        dispatch(features, document_id, self.host)
        return DocumentState.BIG

    def __call__(self, event: Event) -> None:
        """Handle a host pre-read event."""
        self.on_document_open(event.document_id)


def pre_read_callback(
    document_id: Hashable,
    config: Config,
    registry: FeatureRegistry,
    host: Host,
) -> DocumentState:
    """Run detection for one document without keeping a detector around."""
    return BigFileDetector(config, registry, host).on_document_open(document_id)
