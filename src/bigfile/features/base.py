"""Base feature interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Hashable, Optional

from pydantic import BaseModel, ConfigDict, Field

# Optional operations a feature may provide on top of disable
CAPABILITIES = ("enable", "detected")


class FeatureOptions(BaseModel):
    """Options attached to a feature.

    Unknown keys are kept so third-party features can carry their own settings.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    defer: bool = Field(
        False,
        description="Disable only after the document has finished loading",
    )


class BaseFeature(ABC):
    """Abstract base class for features that can be disabled per document."""

    options: FeatureOptions = FeatureOptions()

    @property
    @abstractmethod
    def name(self) -> str:
        """Name the feature is registered under (e.g., 'syntax')."""
        pass

    @abstractmethod
    def disable(self, document_id: Hashable) -> None:
        """Disable the feature for a document.

        Args:
            document_id: Document to disable the feature for.
        """
        pass

    def enable(self, document_id: Hashable) -> None:
        """Re-enable the feature for a document, if supported."""
        raise NotImplementedError(f"Feature {self.name!r} cannot be re-enabled")

    def detected(self, document_id: Hashable) -> bool:
        """Check whether the feature is active for a document, if supported."""
        raise NotImplementedError(f"Feature {self.name!r} cannot report its state")

    @property
    def defer(self) -> bool:
        """True if disabling must wait until the document is loaded."""
        return self.options.defer

    def supports(self, capability: str) -> bool:
        """Check whether an optional operation is implemented.

        Args:
            capability: One of CAPABILITIES.

        Returns:
            True if this feature overrides the operation.
        """
        if capability not in CAPABILITIES:
            raise ValueError(f"Unknown capability: {capability!r}")
        return getattr(type(self), capability) is not getattr(BaseFeature, capability)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} defer={self.defer}>"


class CallbackFeature(BaseFeature):
    """Feature built from plain callables."""

    def __init__(
        self,
        name: str,
        disable: Callable[[Hashable], None],
        *,
        options: FeatureOptions | None = None,
        enable: Optional[Callable[[Hashable], None]] = None,
        detected: Optional[Callable[[Hashable], bool]] = None,
    ):
        self._name = name
        self._disable = disable
        self._enable = enable
        self._detected = detected
        self.options = options or FeatureOptions()

    @property
    def name(self) -> str:
        return self._name

    def disable(self, document_id: Hashable) -> None:
        self._disable(document_id)

    def enable(self, document_id: Hashable) -> None:
        if self._enable is None:
            super().enable(document_id)
        else:
            self._enable(document_id)

    def detected(self, document_id: Hashable) -> bool:
        if self._detected is None:
            return super().detected(document_id)
        return self._detected(document_id)

    def supports(self, capability: str) -> bool:
        if capability not in CAPABILITIES:
            raise ValueError(f"Unknown capability: {capability!r}")
        return getattr(self, f"_{capability}") is not None
