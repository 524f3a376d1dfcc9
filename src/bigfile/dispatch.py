"""Two-phase disabling of features for one document."""

from __future__ import annotations

import logging
from typing import Hashable, Iterable, Optional, Sequence

from bigfile.constants import DOCUMENT_POST_READ
from bigfile.features.base import BaseFeature
from bigfile.host.base import Event, Host, Subscription

logger = logging.getLogger(__name__)


def partition_features(
    features: Iterable[BaseFeature],
) -> tuple[list[BaseFeature], list[BaseFeature]]:
    """Split features into immediate and deferred groups.

    Relative order is kept within each group.

    Args:
        features: Features in configuration order.

    Returns:
        Tuple of (immediate, deferred).
    """
    immediate: list[BaseFeature] = []
    deferred: list[BaseFeature] = []
    for feature in features:
        if feature.defer:
            deferred.append(feature)
        else:
            immediate.append(feature)
    return immediate, deferred


def dispatch(
    features: Sequence[BaseFeature], document_id: Hashable, host: Host
) -> Optional[Subscription]:
    """Disable features for a document.

    Immediate features are disabled before this returns. Deferred features
    are disabled, in order, when the host next fires the post-read event for
    the same document; the subscription fires at most once. Exceptions from
    a feature propagate to the caller.

    Args:
        features: Resolved features in configuration order.
        document_id: Document to disable features for.
        host: Host owning the document.

    Returns:
        The one-shot post-read subscription, or None if nothing is deferred.
    """
    immediate, deferred = partition_features(features)

    for feature in immediate:
        logger.debug(f"Disabling {feature.name} for document {document_id}")
        feature.disable(document_id)

    if not deferred:
        return None

    queue = tuple(deferred)

    def disable_deferred(event: Event) -> None:
        for feature in queue:
            logger.debug(f"Disabling deferred {feature.name} for document {document_id}")
            feature.disable(document_id)

    return host.subscribe(
        DOCUMENT_POST_READ,
        disable_deferred,
        document_id=document_id,
        once=True,
        description=f"[bigfile] Disable {', '.join(f.name for f in queue)}",
    )
