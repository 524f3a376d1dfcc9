"""Features that can be disabled for big files."""

from bigfile.features.base import BaseFeature, CallbackFeature, FeatureOptions
from bigfile.features.builtin import (
    BUILTIN_FEATURES,
    CommandFeature,
    FiletypeFeature,
    HostFeature,
    IlluminateFeature,
    IndentBlanklineFeature,
    LspFeature,
    MatchparenFeature,
    SyntaxFeature,
    TreesitterFeature,
    VimOptsFeature,
)
from bigfile.features.registry import FeatureRegistry, UnknownFeatureError, default_registry

__all__ = [
    "BaseFeature",
    "CallbackFeature",
    "FeatureOptions",
    "BUILTIN_FEATURES",
    "CommandFeature",
    "HostFeature",
    "IndentBlanklineFeature",
    "IlluminateFeature",
    "LspFeature",
    "TreesitterFeature",
    "SyntaxFeature",
    "MatchparenFeature",
    "VimOptsFeature",
    "FiletypeFeature",
    "FeatureRegistry",
    "UnknownFeatureError",
    "default_registry",
]
