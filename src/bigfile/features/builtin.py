"""Features shipped with bigfile.

Each feature switches off one editor enhancement for a single document by
running a host command or setting document-local options.
"""

from __future__ import annotations

import logging
from typing import Hashable

from bigfile.constants import LSP_ATTACH
from bigfile.features.base import BaseFeature, FeatureOptions
from bigfile.host.base import Event, Host

logger = logging.getLogger(__name__)


class HostFeature(BaseFeature):
    """Feature that acts on the document through a host."""

    def __init__(self, host: Host):
        self.host = host


class CommandFeature(HostFeature):
    """Feature disabled by running host commands in the document."""

    commands: tuple[str, ...] = ()

    def disable(self, document_id: Hashable) -> None:
        for command in self.commands:
            self.host.run_command(document_id, command)


class IndentBlanklineFeature(CommandFeature):
    name = "indent_blankline"
    commands = ("IndentBlanklineDisable",)


class IlluminateFeature(CommandFeature):
    name = "illuminate"
    commands = ("IlluminatePauseBuf",)


class TreesitterFeature(CommandFeature):
    name = "treesitter"
    commands = ("TSBufDisable highlight",)


class MatchparenFeature(CommandFeature):
    name = "matchparen"
    commands = ("NoMatchParen",)


class SyntaxFeature(HostFeature):
    """Clears syntax highlighting once the document is loaded."""

    name = "syntax"
    options = FeatureOptions(defer=True)

    def disable(self, document_id: Hashable) -> None:
        self.host.run_command(document_id, "syntax clear")
        self.host.set_option(document_id, "syntax", "OFF")


class FiletypeFeature(HostFeature):
    """Unsets the filetype, which stops filetype plugins from loading."""

    name = "filetype"
    options = FeatureOptions(defer=True)

    def disable(self, document_id: Hashable) -> None:
        self.host.set_option(document_id, "filetype", "")


class VimOptsFeature(HostFeature):
    """Turns off options that are slow on large documents."""

    name = "vimopts"

    # option -> value for big documents
    OPTIONS = {
        "swapfile": False,
        "foldmethod": "manual",
        "undolevels": -1,
        "undoreload": 0,
        "list": False,
    }

    def disable(self, document_id: Hashable) -> None:
        for option, value in self.OPTIONS.items():
            self.host.set_option(document_id, option, value)


class LspFeature(HostFeature):
    """Detaches language server clients as soon as they attach."""

    name = "lsp"

    def disable(self, document_id: Hashable) -> None:
        self.host.subscribe(
            LSP_ATTACH,
            self._detach,
            document_id=document_id,
            description="[bigfile] Detach language servers from big files",
        )

    def _detach(self, event: Event) -> None:
        client_id = event.data.get("client_id")
        if client_id is None:
            logger.warning(f"LSP attach event without client_id for document {event.document_id}")
            return
        logger.debug(f"Detaching LSP client {client_id} from document {event.document_id}")
        self.host.run_command(event.document_id, f"LspDetach {client_id}")


BUILTIN_FEATURES: tuple[type[HostFeature], ...] = (
    IndentBlanklineFeature,
    IlluminateFeature,
    LspFeature,
    TreesitterFeature,
    SyntaxFeature,
    MatchparenFeature,
    VimOptsFeature,
    FiletypeFeature,
)
