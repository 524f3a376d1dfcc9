"""Size classification for opened documents."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Hashable, Optional

from bigfile.config import Config, FilesizeUnit
from bigfile.constants import BYTES_PER_MIB

if TYPE_CHECKING:
    from bigfile.host.base import Host

logger = logging.getLogger(__name__)


def convert_to_filesize_unit(size: int, unit: FilesizeUnit) -> int:
    """Convert a byte count to the given unit.

    MiB values are rounded to the nearest whole MiB, halves rounding up.

    Args:
        size: Size in bytes.
        unit: Target unit.

    Returns:
        Size in the target unit.
    """
    if unit == FilesizeUnit.MIB:
        return math.floor(0.5 + size / BYTES_PER_MIB)
    return size


def get_document_size(host: Host, document_id: Hashable) -> Optional[int]:
    """Get the byte size of a document's backing resource.

    Lookup failures are not errors: the caller treats a missing size as 0.

    Args:
        host: Host owning the document.
        document_id: Document identity.

    Returns:
        Size in bytes, or None if it could not be determined.
    """
    try:
        return host.get_document_size(document_id)
    except Exception as e:
        # Any host failure degrades to size 0
        logger.debug(f"Could not determine size of document {document_id}: {e}")
        return None


def is_big_file(raw_bytes: Optional[int], config: Config, document_id: Hashable = None) -> bool:
    """Decide whether a document counts as big.

    The size threshold is always checked. A predicate pattern can additionally
    flag documents below the threshold; glob patterns play no part here since
    the host already filtered on them.

    Args:
        raw_bytes: Size in bytes, or None if unknown (treated as 0).
        config: Active configuration.
        document_id: Passed through to a predicate pattern.

    Returns:
        True if the document is big.
    """
    filesize = convert_to_filesize_unit(raw_bytes or 0, config.filesize_unit)
    detected = filesize >= config.filesize
    if config.has_predicate:
        detected = bool(config.pattern(document_id, filesize)) or detected  # type: ignore[operator]
    return detected
