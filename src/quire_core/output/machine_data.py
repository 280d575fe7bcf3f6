"""Machine-readable metadata record for one post."""

import json
from collections.abc import Callable
from typing import Any

from quire_core.template.dates import Clock, format_rfc2822, format_rfc3339, now_local, now_utc, system_clock
from quire_core.template.types import RenderContext
from quire_core.types import MachineDataKind

from .sink import Sink, write_all

# Field order is part of the record's contract
RECORD_FIELDS = (
    "number",
    "language",
    "title",
    "author",
    "raw_post_name",
    "blog_name",
    "post_date_rfc3339",
    "post_date_rfc2822",
    "generation_date_utc_rfc3339",
    "generation_date_utc_rfc2822",
    "generation_date_local_rfc3339",
    "generation_date_local_rfc2822",
    "tags",
    "additional_data",
    "styles",
    "scripts",
    "quire-version",
)


def build_record(context: RenderContext, clock: Clock = system_clock) -> dict[str, Any]:
    """Assemble the metadata record, fields in RECORD_FIELDS order.

    Only the four generation_date_* fields depend on clock.
    """
    utc = now_utc(clock)
    local = now_local(clock)

    return {
        "number": context.number,
        "language": context.language,
        "title": context.title,
        "author": context.author,
        "raw_post_name": context.raw_post_name,
        "blog_name": context.blog_name,
        "post_date_rfc3339": format_rfc3339(context.post_date),
        "post_date_rfc2822": format_rfc2822(context.post_date),
        "generation_date_utc_rfc3339": format_rfc3339(utc),
        "generation_date_utc_rfc2822": format_rfc2822(utc),
        "generation_date_local_rfc3339": format_rfc3339(local),
        "generation_date_local_rfc2822": format_rfc2822(local),
        "tags": list(context.tags),
        "additional_data": context.merged_data(),
        "styles": [style.content for style in context.styles],
        "scripts": [script.content for script in context.scripts],
        "quire-version": context.version,
    }


def machine_output_json(context: RenderContext, sink: Sink, clock: Clock = system_clock) -> None:
    """Write the metadata record as indented JSON.

    Raises:
        QuireError(IO_ERROR) if the sink fails
    """
    record = build_record(context, clock)
    text = json.dumps(record, indent=4, ensure_ascii=False) + "\n"
    write_all(sink, text, "JSON machine output")


MACHINE_WRITERS: dict[MachineDataKind, Callable[[RenderContext, Sink, Clock], None]] = {
    MachineDataKind.JSON: machine_output_json,
}


def machine_output(kind: MachineDataKind) -> Callable[[RenderContext, Sink, Clock], None]:
    """Serializer for kind."""
    return MACHINE_WRITERS[kind]
