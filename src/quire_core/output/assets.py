"""Static wrapper templates shipped with the package."""

from dataclasses import dataclass
from importlib import resources


def _read(*parts: str) -> str:
    return resources.files("quire_core.output").joinpath("static", *parts).read_text(encoding="utf-8")


@dataclass(frozen=True)
class OutputAssets:
    """Immutable wrapper strings handed to the engine and serializers.

    Load once with OutputAssets.load() and pass the value around.
    """

    rss_head: str
    rss_foot: str
    tag_head: str
    tag_center: str
    tag_foot: str
    tag_default_class: str

    @classmethod
    def load(cls) -> "OutputAssets":
        """Read the bundled templates.

        Tag fragments are stripped of surrounding whitespace; the RSS
        head and foot are used verbatim.
        """
        return cls(
            rss_head=_read("feed", "rss.head"),
            rss_foot=_read("feed", "rss.foot"),
            tag_head=_read("tag", "head.htm").strip(),
            tag_center=_read("tag", "cntr.htm").strip(),
            tag_foot=_read("tag", "foot.htm").strip(),
            tag_default_class=_read("tag", "default.class").strip(),
        )
