"""Disable slow editor features for big files."""

from bigfile.config import Config, ConfigError, FilesizeUnit, build_config, load_settings
from bigfile.detection import BigFileDetector, DocumentState, document_state
from bigfile.dispatch import dispatch, partition_features
from bigfile.features import (
    BaseFeature,
    CallbackFeature,
    FeatureOptions,
    FeatureRegistry,
    UnknownFeatureError,
    default_registry,
)
from bigfile.host import Event, Host, InMemoryHost, Subscription
from bigfile.plugin import setup
from bigfile.sizing import convert_to_filesize_unit, is_big_file

__all__ = [
    "Config",
    "ConfigError",
    "FilesizeUnit",
    "build_config",
    "load_settings",
    "BigFileDetector",
    "DocumentState",
    "document_state",
    "dispatch",
    "partition_features",
    "BaseFeature",
    "CallbackFeature",
    "FeatureOptions",
    "FeatureRegistry",
    "UnknownFeatureError",
    "default_registry",
    "Event",
    "Host",
    "InMemoryHost",
    "Subscription",
    "setup",
    "convert_to_filesize_unit",
    "is_big_file",
]
