"""Builtin feature tests."""

import pytest

from bigfile.constants import LSP_ATTACH
from bigfile.features.base import BaseFeature, CallbackFeature, FeatureOptions
from bigfile.features.registry import default_registry


@pytest.fixture
def builtins(host):
    """Default registry bound to the test host."""
    return default_registry(host)


@pytest.fixture
def document_id(host):
    return host.add_document("big.c", size=0)


def test_deferred_builtins(builtins):
    """Only syntax and filetype wait for the document to load."""
    deferred = {name for name in builtins.names if builtins.get_feature(name).defer}

    assert deferred == {"syntax", "filetype"}


@pytest.mark.parametrize(
    ("name", "command"),
    [
        ("indent_blankline", "IndentBlanklineDisable"),
        ("illuminate", "IlluminatePauseBuf"),
        ("treesitter", "TSBufDisable highlight"),
        ("matchparen", "NoMatchParen"),
    ],
)
def test_command_features(builtins, host, document_id, name, command):
    """Command features run their command in the document."""
    builtins.get_feature(name).disable(document_id)

    assert host.documents[document_id].commands == [command]


def test_syntax_feature(builtins, host, document_id):
    """Syntax is cleared and switched off."""
    builtins.get_feature("syntax").disable(document_id)

    document = host.documents[document_id]
    assert document.commands == ["syntax clear"]
    assert document.options == {"syntax": "OFF"}


def test_filetype_feature(builtins, host, document_id):
    """Filetype is unset."""
    builtins.get_feature("filetype").disable(document_id)

    assert host.documents[document_id].options == {"filetype": ""}


def test_vimopts_feature(builtins, host, document_id):
    """Slow options are turned off."""
    builtins.get_feature("vimopts").disable(document_id)

    assert host.documents[document_id].options == {
        "swapfile": False,
        "foldmethod": "manual",
        "undolevels": -1,
        "undoreload": 0,
        "list": False,
    }


def test_lsp_feature_detaches_clients(builtins, host, document_id):
    """Language servers attaching to the document are detached."""
    other = host.add_document("other.c", size=0)
    builtins.get_feature("lsp").disable(document_id)

    host.emit(LSP_ATTACH, document_id, client_id=3)
    host.emit(LSP_ATTACH, other, client_id=4)
    host.emit(LSP_ATTACH, document_id, client_id=5)

    assert host.documents[document_id].commands == ["LspDetach 3", "LspDetach 5"]
    assert host.documents[other].commands == []


def test_lsp_feature_ignores_event_without_client(builtins, host, document_id):
    """Attach events without a client id are skipped."""
    builtins.get_feature("lsp").disable(document_id)

    host.emit(LSP_ATTACH, document_id)

    assert host.documents[document_id].commands == []
    assert host.errors == []


# =============================================================================
# Capabilities
# =============================================================================


class Toggle(BaseFeature):
    name = "toggle"

    def __init__(self):
        self.active = {}

    def disable(self, document_id):
        self.active[document_id] = False

    def enable(self, document_id):
        self.active[document_id] = True

    def detected(self, document_id):
        return self.active.get(document_id, True)


def test_subclass_capabilities():
    """supports() reports overridden optional operations."""
    toggle = Toggle()

    assert toggle.supports("enable")
    assert toggle.supports("detected")
    assert not toggle.defer

    toggle.disable(1)
    assert not toggle.detected(1)
    toggle.enable(1)
    assert toggle.detected(1)


def test_builtin_capabilities(builtins):
    """Builtin features only disable."""
    syntax = builtins.get_feature("syntax")

    assert not syntax.supports("enable")
    with pytest.raises(NotImplementedError):
        syntax.enable(1)
    with pytest.raises(NotImplementedError):
        syntax.detected(1)


def test_unknown_capability():
    """Asking about an unknown operation is an error."""
    with pytest.raises(ValueError):
        Toggle().supports("pause")


def test_callback_feature_optional_operations():
    """CallbackFeature forwards enable and detected when given."""
    state = {}
    feature = CallbackFeature(
        "cb",
        lambda doc: state.update({doc: False}),
        enable=lambda doc: state.update({doc: True}),
        detected=lambda doc: state.get(doc, True),
    )

    feature.disable(9)
    assert feature.detected(9) is False
    feature.enable(9)
    assert feature.detected(9) is True
    assert feature.supports("enable") and feature.supports("detected")


def test_feature_options_keep_extra_keys():
    """Options accept feature-specific keys."""
    options = FeatureOptions(defer=True, timeout=5)

    assert options.defer
    assert options.timeout == 5
    assert not FeatureOptions().defer
