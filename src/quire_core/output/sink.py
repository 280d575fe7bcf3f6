"""Byte sink protocol and checked writes."""

from typing import Protocol

from quire_core.errors import create_error


class Sink(Protocol):
    """Anything with a binary write(), e.g. an open file or io.BytesIO."""

    def write(self, data: bytes, /) -> int | None: ...


def write_all(sink: Sink, data: bytes | str, subject: str) -> None:
    """Write every byte of data to sink.

    Args:
        sink: Destination
        data: Bytes, or text to encode as UTF-8
        subject: What is being written, for error reports (e.g. "title tag")

    Raises:
        QuireError(IO_ERROR) if the sink fails or stops accepting bytes
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    view = memoryview(data)
    try:
        while view:
            written = sink.write(view)
            if written is None:
                break
            if written == 0:
                raise create_error(
                    "IO_ERROR",
                    op="write",
                    subject=subject,
                    reason=f"sink accepted no bytes when writing {subject}",
                )
            view = view[written:]
    except (OSError, ValueError) as e:
        raise create_error(
            "IO_ERROR",
            op="write",
            subject=subject,
            reason=f"{e} when writing {subject}",
        ) from e
