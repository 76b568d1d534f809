"""Type definitions for the Directed Edge client."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from xml.sax.saxutils import escape, quoteattr


class Protocol(str, Enum):
    """URL scheme used to reach the web services."""

    HTTP = "http"
    HTTPS = "https"


class UpdateMethod(str, Enum):
    """How the server applies an incremental update batch.

    The whole batch is interpreted under a single method; the value is what
    goes out in the ``updateMethod`` query option.
    """

    ADD = "add"
    SUBTRACT = "subtract"
    REPLACE = "replace"
    DELETE = "delete"


@dataclass
class Item:
    """An item in a Directed Edge database.

    Links map a target item id to a weight; a weight of 0 means the link is
    unweighted. Preselected and blacklisted entries are item ids.
    """

    id: str
    links: dict[str, int] = field(default_factory=dict)
    tags: set[str] = field(default_factory=set)
    properties: dict[str, Any] = field(default_factory=dict)
    preselected: list[str] = field(default_factory=list)
    blacklisted: list[str] = field(default_factory=list)

    def link_to(self, other: "Item | str", weight: int = 0) -> None:
        """Link this item to another one, optionally with a weight (1-10)."""
        if weight < 0 or weight > 10:
            raise ValueError(f"Link weight must be between 0 and 10, got {weight}")
        target = other.id if isinstance(other, Item) else other
        self.links[target] = weight

    def unlink_from(self, other: "Item | str") -> None:
        target = other.id if isinstance(other, Item) else other
        self.links.pop(target, None)

    def add_tag(self, tag: str) -> None:
        self.tags.add(tag)

    def remove_tag(self, tag: str) -> None:
        self.tags.discard(tag)

    def __getitem__(self, name: str) -> Any:
        return self.properties[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.properties[name] = value

    def to_xml(self) -> str:
        """Render the item as an ``<item>`` element for an export document."""
        parts = [f"<item id={quoteattr(self.id)}>"]

        for target, weight in self.links.items():
            if weight:
                parts.append(f'<link weight="{weight}">{escape(target)}</link>')
            else:
                parts.append(f"<link>{escape(target)}</link>")

        # Sorted so that identical items render identically.
        for tag in sorted(self.tags):
            parts.append(f"<tag>{escape(tag)}</tag>")

        for target in self.preselected:
            parts.append(f"<preselected>{escape(target)}</preselected>")
        for target in self.blacklisted:
            parts.append(f"<blacklisted>{escape(target)}</blacklisted>")

        for name, value in self.properties.items():
            parts.append(f"<property name={quoteattr(name)}>{escape(str(value))}</property>")

        parts.append("</item>")
        return "".join(parts) + "\n"
