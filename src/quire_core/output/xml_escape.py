"""Sink wrapper escaping XML-significant characters."""

from .sink import Sink, write_all


def xml_escape(text: str) -> str:
    """Escape <, > and & (and nothing else)."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class XmlEscapeWriter:
    """Write-through wrapper replacing <, > and & with entities.

    E.g. writing b"hewwo > benlo" forwards b"hewwo &gt; benlo".
    """

    def __init__(self, inner: Sink, subject: str = "escaped output") -> None:
        self._inner = inner
        self._subject = subject

    def write(self, data: bytes) -> int:
        """Escape and forward data; reports len(data) as written."""
        escaped = bytes(data).replace(b"&", b"&amp;").replace(b"<", b"&lt;").replace(b">", b"&gt;")
        write_all(self._inner, escaped, self._subject)
        return len(data)

    def flush(self) -> None:
        flush = getattr(self._inner, "flush", None)
        if flush is not None:
            flush()
