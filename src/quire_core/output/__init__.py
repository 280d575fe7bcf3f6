"""Quire output: wrapped elements, paragraph filtering and serializers."""

from .wrapped_element import (
    SCRIPT_WRAPPERS,
    STYLE_WRAPPERS,
    ElementWrappers,
    ScriptElement,
    StyleElement,
    WrappedElement,
    load_all,
)
from .assets import OutputAssets
from .sink import Sink, write_all
from .paragraph_passer import ParagraphPasser
from .xml_escape import XmlEscapeWriter, xml_escape
from .feed import RssFeedWriter, get_feed_writer
from .machine_data import RECORD_FIELDS, build_record, machine_output, machine_output_json

__all__ = [
    "WrappedElement",
    "ElementWrappers",
    "ScriptElement",
    "StyleElement",
    "SCRIPT_WRAPPERS",
    "STYLE_WRAPPERS",
    "load_all",
    "OutputAssets",
    "Sink",
    "write_all",
    "ParagraphPasser",
    "XmlEscapeWriter",
    "xml_escape",
    "RssFeedWriter",
    "get_feed_writer",
    "RECORD_FIELDS",
    "build_record",
    "machine_output",
    "machine_output_json",
]
