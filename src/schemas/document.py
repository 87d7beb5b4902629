"""Specification document domain objects."""

from dataclasses import dataclass, field
from pathlib import Path

from lxml import html
from pydantic import BaseModel

from .person import Person


@dataclass
class SpecDocument:
    """A single specification source and its in-progress content tree.

    Attributes:
        shortname: Name derived from the source filename (``cid.src.html`` -> ``cid``)
        source_path: Path of the ``.src.html`` file
        tree: Parsed lxml HTML root element, mutated in place during the build
        title: Declared document title, filled in by metadata extraction
        author_ids: Author identifiers from the authorship declaration
        output_path: Where the published HTML is (or will be) written
    """

    shortname: str
    source_path: Path
    tree: html.HtmlElement
    title: str = ""
    author_ids: list[str] = field(default_factory=list)
    output_path: Path | None = None

    @property
    def head(self) -> html.HtmlElement:
        return self.tree.find("head")

    @property
    def body(self) -> html.HtmlElement:
        return self.tree.find("body")

    @property
    def main(self) -> html.HtmlElement | None:
        return self.tree.find(".//main")

    @property
    def content_root(self) -> html.HtmlElement:
        """The element holding authored content (``<main>`` once assembled)."""
        main = self.main
        return main if main is not None else self.body

    def find_by_id(self, element_id: str) -> html.HtmlElement | None:
        found = self.tree.xpath("//*[@id=$id]", id=element_id)
        return found[0] if found else None


class DocumentMetadata(BaseModel):
    """Metadata extracted from a source before any content processing.

    Attributes:
        shortname: Document short name
        title: Declared title
        authors: Resolved authors, in declaration order (never empty)
        has_abstract: Whether the source contains an ``#abstract`` element
    """

    shortname: str
    title: str
    authors: list[Person]
    has_abstract: bool = False
