"""Process-wide plugin state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from bigfile.config import Config
    from bigfile.host.base import Subscription


class PluginState:
    """Plugin state singleton.

    Set by setup() and never reset except by a new process (or by tests).
    """

    _instance: Optional["PluginState"] = None

    def __new__(cls) -> "PluginState":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.loaded = False
            cls._instance.config = None
            cls._instance.subscriptions = []
        return cls._instance

    loaded: bool
    config: Optional["Config"]
    subscriptions: list["Subscription"]


def get_plugin_state() -> PluginState:
    """Get the plugin state singleton."""
    return PluginState()


def reset_plugin_state() -> None:
    """Reset the plugin state (for testing)."""
    PluginState._instance = None
