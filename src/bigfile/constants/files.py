"""File size thresholds and units.

These settings decide when a document counts as "big". Anything at or above
the threshold gets its enhancement features disabled when it is opened.
"""

# =============================================================================
# Size Threshold
# =============================================================================
# Documents at or above DEFAULT_FILESIZE (measured in DEFAULT_FILESIZE_UNIT)
# are treated as big files.

DEFAULT_FILESIZE = 2
DEFAULT_FILESIZE_UNIT = "MiB"

# =============================================================================
# Units
# =============================================================================
# Raw sizes arrive in bytes. MiB values are rounded to the nearest whole MiB.

BYTES_PER_MIB = 1024 * 1024

# =============================================================================
# Pattern
# =============================================================================
# Glob patterns the host matches against the document path before detection
# runs at all. "*" means every document is checked.

DEFAULT_PATTERN = ("*",)
