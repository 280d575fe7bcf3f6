"""Streaming filter passing only the first N top-level <p> blocks.

No DOM is built: the filter scans for the literal markers "<p" and "</p>".
The opening marker is loose: "<pre>" and "<param>" count as paragraph
openers too.
"""

from quire_core.errors import create_error

from .sink import Sink, write_all

OPEN = b"<p"
CLOSE = b"</p>"

# Tails that may be the start of a marker split across writes, longest first
PARTIAL_MARKERS = (b"</p", b"</", b"<p", b"<")


class ParagraphPasser:
    """Byte sink wrapper forwarding everything up to the end of the Nth paragraph.

    Output is independent of how input is split across write() calls.
    Call close() (or use as a context manager) once input is exhausted so
    that a held-back partial marker is settled.
    """

    def __init__(self, inner: Sink, count: int) -> None:
        """Initialize the filter.

        Args:
            inner: Sink receiving the passed-through bytes
            count: Number of top-level paragraphs to let through
        """
        if count < 0:
            raise create_error(
                "PARSE_ERROR",
                kind="paragraph count",
                subject="paragraph passer",
                reason=f"{count} is negative",
            )
        self._inner = inner
        self.paras_left = count
        self.depth = 0
        self.has_ended = False
        self._carry = b""
        self._closed = False

    def write(self, data: bytes) -> int:
        """Filter one chunk.

        Returns:
            len(data), even for bytes held back or discarded

        Raises:
            QuireError(IO_ERROR) if the inner sink fails or the filter is closed
        """
        if self._closed:
            raise create_error(
                "IO_ERROR",
                op="write",
                subject="paragraph passer",
                reason="write after close",
            )

        accepted = len(data)
        if self.has_ended:
            return accepted

        buf = self._carry + bytes(data)
        self._carry = b""
        for partial in PARTIAL_MARKERS:
            if buf.endswith(partial):
                self._carry = buf[-len(partial) :]
                buf = buf[: -len(partial)]
                break

        self._scan(buf)
        return accepted

    def flush(self) -> None:
        """Flush the inner sink; a held-back partial marker stays held."""
        flush = getattr(self._inner, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        """Settle any held-back bytes as final input. Does not close the inner sink."""
        if self._closed:
            return
        carry, self._carry = self._carry, b""
        if carry and not self.has_ended:
            self._scan(carry)
        self._closed = True
        self.flush()

    def __enter__(self) -> "ParagraphPasser":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _scan(self, buf: bytes) -> None:
        """Walk the markers in buf in order, forwarding what is allowed."""
        pos = 0
        while not self.has_ended and pos < len(buf):
            open_idx = buf.find(OPEN, pos)
            close_idx = buf.find(CLOSE, pos)

            if open_idx != -1 and (close_idx == -1 or open_idx < close_idx):
                if self.paras_left == 0:
                    # Budget spent: keep the preamble, drop the rest for good
                    self._forward(buf[pos:open_idx])
                    self.has_ended = True
                    return
                self.depth += 1
                end = open_idx + len(OPEN)
                self._forward(buf[pos:end])
                pos = end
            elif close_idx != -1:
                end = close_idx + len(CLOSE)
                self._forward(buf[pos:end])
                pos = end
                self._close_paragraph()
            else:
                self._forward(buf[pos:])
                return

    def _close_paragraph(self) -> None:
        if self.depth == 0:
            # Stray closing tag outside any paragraph
            return
        self.depth -= 1
        if self.depth == 0:
            self.paras_left -= 1

    def _forward(self, data: bytes) -> None:
        if data:
            write_all(self._inner, data, "paragraph passer output")
