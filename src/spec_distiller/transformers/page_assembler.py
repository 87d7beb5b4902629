"""Page assembly for published specs.

Wraps authored content in ``<main>`` behind a header rendered from a Jinja2
template (title, date, editors, issue links, abstract), and adds the head
metadata every published spec carries.
"""

import logging
from pathlib import Path
from typing import Mapping

from jinja2 import Environment, FileSystemLoader
from lxml import etree, html

from schemas.config import BuildConfig
from schemas.document import DocumentMetadata, SpecDocument
from schemas.report import BuildIssue

from .filters import FILTERS, normalize_space
from .transformer import DocumentTransformer, TransformResult

logger = logging.getLogger(__name__)

# Resolve the project root (4 levels up from this file):
#   page_assembler.py → transformers/ → spec_distiller/ → src/ → project root
# If this file is ever moved, the chain of .parent calls must be updated.
PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent
TEMPLATES_DIR = PACKAGE_ROOT / "resources" / "templates"

GENERATED_WARNING = (
    " GENERATED SPEC. DO NOT EDIT. "
    "Edit the .src.html source instead; this file is overwritten on every build. "
)
ABSTRACT_SLOT_ATTR = "data-abstract-slot"


class PageAssembler(DocumentTransformer):
    """Assemble the published page structure around a document's content.

    Attributes:
        config: Build configuration (site URL, project name, assets)
        metadata: Extracted metadata for every document, by short name
        build_date: Date printed in every header (YYYY-MM-DD)
    """

    def __init__(
        self,
        config: BuildConfig,
        metadata: Mapping[str, DocumentMetadata],
        build_date: str,
        templates_dir: Path | None = None,
        header_template: str = "header.html.j2",
        nav_template: str = "nav.html.j2",
    ):
        self.config = config
        self.metadata = metadata
        self.build_date = build_date
        self.templates_dir = templates_dir or TEMPLATES_DIR

        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
        )
        for name, func in FILTERS.items():
            self._env.filters[name] = func
        self._header_template = self._env.get_template(header_template)
        self._nav_template = self._env.get_template(nav_template)

    def transform(self, document: SpecDocument) -> TransformResult:
        """Assemble head metadata, header, main and nav for a document.

        Args:
            document: Document whose metadata has already been extracted

        Returns:
            TransformResult with a missing-abstract error if applicable
        """
        result = TransformResult()
        metadata = self.metadata[document.shortname]
        abstract = document.find_by_id("abstract") if metadata.has_abstract else None

        if abstract is None:
            message = f"Missing abstract in {metadata.title}"
            logger.error(f"{document.shortname}: {message}")
            result.issues.append(
                BuildIssue(
                    kind="missing-abstract",
                    document=document.shortname,
                    subject=metadata.title,
                    message=message,
                )
            )

        self._decorate_head(document, metadata, abstract)
        main = self._wrap_main(document, metadata, abstract)

        nav = html.fragment_fromstring(
            self._nav_template.render(project_name=self.config.project_name).strip()
        )
        body = document.body
        nav.tail = body.text
        body.text = None
        body.insert(0, nav)

        logger.debug(f"{document.shortname}: assembled page ({len(main)} top-level elements)")
        return result

    def _decorate_head(
        self,
        document: SpecDocument,
        metadata: DocumentMetadata,
        abstract: html.HtmlElement | None,
    ) -> None:
        head = document.head
        if head is None:
            head = html.Element("head")
            document.tree.insert(0, head)

        comment = etree.Comment(GENERATED_WARNING)
        comment.tail = head.text
        head.text = "\n"
        head.insert(0, comment)

        etree.SubElement(head, "link", rel="stylesheet", href=self.config.stylesheet)
        self._meta(head, property="og:title", content=f"{self.config.project_name}: {metadata.title}")
        if abstract is not None:
            self._meta(head, property="og:description", content=normalize_space(abstract.text_content()))
        self._meta(head, property="og:url", content=self.config.spec_url(document.shortname))
        self._meta(
            head,
            property="og:image",
            content=f"{self.config.base_url}/{document.shortname}.png",
        )
        self._meta(head, property="og:site_name", content=self.config.project_name)
        etree.SubElement(head, "script", type="module", src=self.config.copy_script)

    @staticmethod
    def _meta(head: html.HtmlElement, **attrs: str) -> None:
        etree.SubElement(head, "meta", **attrs)

    def _wrap_main(
        self,
        document: SpecDocument,
        metadata: DocumentMetadata,
        abstract: html.HtmlElement | None,
    ) -> html.HtmlElement:
        """Move body content into <main> behind the rendered header."""
        body = document.body
        if body is None:
            body = etree.SubElement(document.tree, "body")
        header = html.fragment_fromstring(
            self._header_template.render(
                title=metadata.title,
                build_date=self.build_date,
                authors=metadata.authors,
                issues_url=self.config.issues_url,
                has_abstract=abstract is not None,
            ).strip()
        )

        main = html.Element("main")
        main.append(header)
        header.tail = body.text
        body.text = None
        for child in list(body):
            main.append(child)
        body.append(main)

        if abstract is not None:
            slot = header.xpath(f".//*[@{ABSTRACT_SLOT_ATTR}]")[0]
            del slot.attrib[ABSTRACT_SLOT_ATTR]
            abstract.drop_tree()
            abstract.tail = None
            slot.append(abstract)

        return main
