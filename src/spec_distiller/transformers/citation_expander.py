"""Citation marker expansion and references section generation.

Inline ``[[key]]`` markers in text content are replaced with links to a
references section appended to the document:

    see [[rfc8259]]  ->  see [<a href="#ref-rfc8259" class="ref">rfc8259</a>]

    <section id="references">
      <h2>References</h2>
      <dl>
        <dt id="ref-rfc8259">[rfc8259]</dt>
        <dd>...citation fragment...</dd>
      </dl>
    </section>
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Mapping

from lxml import etree, html

from schemas.document import SpecDocument
from schemas.report import BuildIssue

from .transformer import DocumentTransformer, TransformResult

logger = logging.getLogger(__name__)

CITATION_PATTERN = re.compile(r"\[\[([\w-]+)\]\]")
CITATION_CLASS = "ref"
REFERENCES_ID = "references"

# Text inside these elements is never authored prose
SKIPPED_TAGS = frozenset({"script", "style", "template"})


def reference_anchor(key: str) -> str:
    return f"ref-{key}"


@dataclass
class ExpansionResult(TransformResult):
    """Outcome of expanding citations in one document."""

    citations: list[str] = field(default_factory=list)


class CitationExpander(DocumentTransformer):
    """Expand citation markers against a closed bibliography.

    Attributes:
        bibliography: Read-only mapping of citation key to HTML fragment.
            Every document's self-citation must already be present.
    """

    def __init__(self, bibliography: Mapping[str, str]):
        self.bibliography = bibliography

    def transform(self, document: SpecDocument) -> ExpansionResult:
        """Expand markers in the document's content and append references.

        Args:
            document: The document to expand

        Returns:
            ExpansionResult with the sorted keys used and unresolved-citation errors
        """
        result = ExpansionResult()
        used: set[str] = set()
        root = document.content_root

        self._expand_element(root, document.shortname, used, result)

        if used:
            result.citations = sorted(used)
            section = self._build_references_section(result.citations)
            section.set("id", self._references_id(document))
            root.append(section)
            logger.debug(f"{document.shortname}: cited {', '.join(result.citations)}")
        return result

    def _expand_element(
        self,
        element: html.HtmlElement,
        shortname: str,
        used: set[str],
        result: ExpansionResult,
    ) -> None:
        """Expand markers in an element's text and, recursively, its children."""
        children = list(element)

        if element.text:
            leading, anchors = self._split_text(element.text, shortname, used, result)
            element.text = leading
            for i, anchor in enumerate(anchors):
                element.insert(i, anchor)

        for child in children:
            if isinstance(child.tag, str) and child.tag.lower() not in SKIPPED_TAGS:
                self._expand_element(child, shortname, used, result)
            if child.tail:
                leading, anchors = self._split_text(child.tail, shortname, used, result)
                child.tail = leading
                position = element.index(child) + 1
                for i, anchor in enumerate(anchors):
                    element.insert(position + i, anchor)

    def _split_text(
        self,
        text: str,
        shortname: str,
        used: set[str],
        result: ExpansionResult,
    ) -> tuple[str, list[html.HtmlElement]]:
        """Split text around resolvable markers.

        Returns:
            The text preceding the first link, and the links to insert after
            it (each carrying the following text as its tail)
        """
        leading: str | None = None
        anchors: list[html.HtmlElement] = []
        buffer: list[str] = []
        last = 0

        for match in CITATION_PATTERN.finditer(text):
            key = match.group(1)
            buffer.append(text[last:match.start()])
            last = match.end()

            if key not in self.bibliography:
                message = f'No "{key}" entry in the bibliography.'
                logger.error(f"{shortname}: {message}")
                result.issues.append(
                    BuildIssue(
                        kind="unresolved-citation",
                        document=shortname,
                        subject=key,
                        message=message,
                    )
                )
                buffer.append(match.group(0))
                continue

            buffer.append("[")
            if anchors:
                anchors[-1].tail = "".join(buffer)
            else:
                leading = "".join(buffer)
            anchor = html.Element("a", href=f"#{reference_anchor(key)}")
            anchor.set("class", CITATION_CLASS)
            anchor.text = key
            anchors.append(anchor)
            used.add(key)
            buffer = ["]"]

        if not anchors:
            return text, []

        buffer.append(text[last:])
        anchors[-1].tail = "".join(buffer)
        return leading or "", anchors

    @staticmethod
    def _references_id(document: SpecDocument) -> str:
        """First of references, references-1, ... not already used in the document."""
        candidate = REFERENCES_ID
        suffix = 0
        while document.find_by_id(candidate) is not None:
            suffix += 1
            candidate = f"{REFERENCES_ID}-{suffix}"
        return candidate

    def _build_references_section(self, keys: list[str]) -> html.HtmlElement:
        section = html.Element("section")
        heading = etree.SubElement(section, "h2")
        heading.text = "References"
        dl = etree.SubElement(section, "dl")

        for key in keys:
            dt = etree.SubElement(dl, "dt", id=reference_anchor(key))
            dt.text = f"[{key}]"
            dd = etree.SubElement(dl, "dd")
            self._inject_fragment(dd, self.bibliography[key])

        return section

    def _inject_fragment(self, target: html.HtmlElement, fragment: str) -> None:
        """Append pre-rendered markup to an element."""
        if not fragment.strip():
            return
        for item in html.fragments_fromstring(fragment):
            if isinstance(item, str):
                if len(target):
                    target[-1].tail = (target[-1].tail or "") + item
                else:
                    target.text = (target.text or "") + item
            else:
                target.append(item)
