"""Host event names.

The host fires these around document loading. Detection hooks the pre-read
event; deferred features wait for the post-read event of the same document.
"""

DOCUMENT_PRE_READ = "document.pre_read"
DOCUMENT_POST_READ = "document.post_read"
LSP_ATTACH = "lsp.attach"
