"""Feature names and side-table keys."""

# =============================================================================
# Default Features
# =============================================================================
# Features disabled for big files when the user does not override the list.
# Order matters: features are disabled in this order within each phase.

DEFAULT_FEATURES = (
    "indent_blankline",
    "illuminate",
    "lsp",
    "treesitter",
    "syntax",
    "matchparen",
    "vimopts",
    "filetype",
)

# =============================================================================
# Document Side-Table
# =============================================================================
# Per-document variable recording the detection verdict (0 or 1).

DETECTED_VAR = "bigfile_detected"

# =============================================================================
# Registration
# =============================================================================
# Subscription group owning the pre-read handler. Re-running setup clears it.

SUBSCRIPTION_GROUP = "bigfile"
