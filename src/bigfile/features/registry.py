"""Feature registry for resolving feature names."""

from __future__ import annotations

import logging
from typing import Callable, Hashable, Iterable, Optional

from bigfile.config import ConfigError
from bigfile.features.base import BaseFeature, CallbackFeature, FeatureOptions
from bigfile.features.builtin import BUILTIN_FEATURES
from bigfile.host.base import Host

logger = logging.getLogger(__name__)


class UnknownFeatureError(ConfigError):
    """Raised when a configured feature name is not registered."""

    def __init__(self, name: str, known: Iterable[str] = ()):
        self.name = name
        known = sorted(known)
        message = f"Unknown feature: {name!r}"
        if known:
            message += f" (registered: {', '.join(known)})"
        super().__init__(message)


class FeatureRegistry:
    """Registry mapping feature names to feature handlers.

    Registration order is kept but has no effect on dispatch; features are
    disabled in the order the configuration lists them.
    """

    def __init__(self, features: Iterable[BaseFeature] = ()):
        self._features: dict[str, BaseFeature] = {}
        for feature in features:
            self.register(feature)

    def register(self, feature: BaseFeature, replace: bool = False) -> BaseFeature:
        """Add a feature to the registry.

        Args:
            feature: Feature to register under feature.name.
            replace: Allow overwriting an existing feature of the same name.

        Returns:
            The registered feature.

        Raises:
            ValueError: If the name is taken and replace is False.
        """
        if feature.name in self._features and not replace:
            raise ValueError(f"Feature {feature.name!r} is already registered")
        self._features[feature.name] = feature
        logger.debug(f"Registered feature {feature.name!r} (defer={feature.defer})")
        return feature

    def register_callback(
        self,
        name: str,
        disable: Callable[[Hashable], None],
        *,
        defer: bool = False,
        enable: Optional[Callable[[Hashable], None]] = None,
        detected: Optional[Callable[[Hashable], bool]] = None,
        replace: bool = False,
        **options,
    ) -> BaseFeature:
        """Register a feature built from plain callables.

        Args:
            name: Feature name.
            disable: Called with the document id to disable the feature.
            defer: Disable only after the document has finished loading.
            enable: Optional re-enable callable.
            detected: Optional state check callable.
            replace: Allow overwriting an existing feature of the same name.
            **options: Extra options stored on the feature.

        Returns:
            The registered feature.
        """
        feature = CallbackFeature(
            name,
            disable,
            options=FeatureOptions(defer=defer, **options),
            enable=enable,
            detected=detected,
        )
        return self.register(feature, replace=replace)

    def get_feature(self, name: str) -> BaseFeature:
        """Get the feature registered under a name.

        Args:
            name: Feature name.

        Returns:
            Registered feature.

        Raises:
            UnknownFeatureError: If no feature has that name.
        """
        try:
            return self._features[name]
        except KeyError:
            raise UnknownFeatureError(name, self._features) from None

    def resolve(self, names: Iterable[str]) -> list[BaseFeature]:
        """Get features for several names, keeping their order."""
        return [self.get_feature(name) for name in names]

    def __contains__(self, name: object) -> bool:
        return name in self._features

    def __len__(self) -> int:
        return len(self._features)

    @property
    def names(self) -> list[str]:
        """Get list of registered feature names."""
        return list(self._features)


def default_registry(host: Host) -> FeatureRegistry:
    """Create a registry holding every builtin feature bound to a host."""
    return FeatureRegistry(feature_cls(host) for feature_cls in BUILTIN_FEATURES)
