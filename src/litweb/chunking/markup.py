"""Document markup accumulated while scanning in weave mode."""

import html
from typing import List, Optional


class WeaveMarkup:
    """Append-only markup buffer.

    Text outside chunks is copied verbatim; chunk bodies are HTML-escaped and
    wrapped in a ``<pre class="chunk">`` block tagged with the chunk name.
    """

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._open: Optional[str] = None

    def text(self, line: str) -> None:
        self._parts.append(line)

    def open_chunk(self, name: str) -> None:
        # A start marker inside a chunk switches chunks without an '@'
        if self._open is not None:
            self.close_chunk()
        label = html.escape(name)
        self._parts.append(
            f'<pre class="chunk" data-chunk="{label}">'
            f'<span class="chunk-name">&lt;&lt;{label}&gt;&gt;=</span>\n'
        )
        self._open = name

    def body(self, line: str) -> None:
        self._parts.append(html.escape(line, quote=False))

    def close_chunk(self) -> None:
        if self._open is None:
            return
        self._parts.append("</pre>\n")
        self._open = None

    def getvalue(self) -> str:
        """Return the markup, closing a chunk left open at end of document."""
        self.close_chunk()
        return "".join(self._parts)
