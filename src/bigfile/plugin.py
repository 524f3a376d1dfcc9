"""Plugin setup: merges configuration and hooks detection into the host."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from bigfile.config import Config, build_config
from bigfile.constants import DOCUMENT_PRE_READ, SUBSCRIPTION_GROUP
from bigfile.detection import BigFileDetector
from bigfile.features.registry import FeatureRegistry, default_registry
from bigfile.host.base import Host
from bigfile.state import get_plugin_state

logger = logging.getLogger(__name__)


def setup(
    host: Host,
    overrides: Optional[Mapping[str, Any] | Config] = None,
    registry: Optional[FeatureRegistry] = None,
) -> BigFileDetector:
    """Configure bigfile and register detection on the host's pre-read event.

    Calling setup again replaces the previous registration.

    Args:
        host: Host to register with.
        overrides: User settings merged onto the defaults, or a ready Config.
        registry: Feature registry. Defaults to the builtin features bound to host.

    Returns:
        The registered detector.

    Raises:
        ConfigError: If the settings are invalid.
        UnknownFeatureError: If a configured feature is not registered.
    """
    config = overrides if isinstance(overrides, Config) else build_config(overrides)
    if registry is None:
        registry = default_registry(host)

    # Fail here rather than on the first big file
    registry.resolve(config.features)

    detector = BigFileDetector(config, registry, host)

    state = get_plugin_state()
    for previous in state.subscriptions:
        previous.cancel()
    host.clear_group(SUBSCRIPTION_GROUP)
    subscription = host.subscribe(
        DOCUMENT_PRE_READ,
        detector,
        patterns=config.globs,
        group=SUBSCRIPTION_GROUP,
        description=config.description,
    )

    state.config = config
    state.subscriptions = [subscription]
    state.loaded = True

    logger.debug(
        f"bigfile loaded: threshold {config.filesize} {config.filesize_unit.value}, "
        f"patterns {', '.join(config.globs)}, features {', '.join(config.features)}"
    )
    return detector


# Alias kept for users who call config() instead of setup()
config = setup
