"""Configuration constants.

Re-exports all constants for convenient importing:
    from bigfile.constants import BYTES_PER_MIB, DEFAULT_FEATURES
"""

from bigfile.constants.files import *  # noqa: F403
from bigfile.constants.features import *  # noqa: F403
from bigfile.constants.events import *  # noqa: F403
