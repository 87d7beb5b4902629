"""Metadata extraction from specification sources.

Reads the declared title and authorship of a source before any content
processing happens, so that every document's self-citation can be built
ahead of the resolution phase.

Authorship is declared in the source head:

    <meta name="authors" content="robin, bumblefudge">
"""

import logging
import re

from schemas.document import DocumentMetadata, SpecDocument
from schemas.person import PersonRegistry
from spec_distiller.exceptions import MissingTitleError, UnknownAuthorError

from .filters import normalize_space

logger = logging.getLogger(__name__)

AUTHORS_META_XPATH = "//meta[@name='authors']"
DEFAULT_FALLBACK_AUTHORS = ("robin", "bumblefudge")

_AUTHOR_SEPARATOR = re.compile(r"[\s,]+")


class MetadataExtractor:
    """Extract title and authors from sources and resolve authors to people.

    Attributes:
        registry: Person registry used to resolve author identifiers
        fallback_authors: Identifiers used when a source declares no authors
    """

    def __init__(
        self,
        registry: PersonRegistry,
        fallback_authors: list[str] | tuple[str, ...] = DEFAULT_FALLBACK_AUTHORS,
    ):
        self.registry = registry
        self.fallback_authors = list(fallback_authors)

    def extract(self, document: SpecDocument) -> DocumentMetadata:
        """Extract metadata, stripping the authorship declaration from the tree.

        Sets ``document.title`` and ``document.author_ids`` as a side effect.

        Raises:
            MissingTitleError: If the source has no (non-blank) <title>
            UnknownAuthorError: If an author is missing from the registry
        """
        title = self._read_title(document)
        author_ids = self._read_author_ids(document)
        if not author_ids:
            logger.debug(
                f"{document.shortname} declares no authors, using {self.fallback_authors}"
            )
            author_ids = list(self.fallback_authors)

        authors = []
        for author_id in author_ids:
            person = self.registry.get(author_id)
            if person is None:
                raise UnknownAuthorError(author_id, document.shortname)
            authors.append(person)

        document.title = title
        document.author_ids = author_ids

        return DocumentMetadata(
            shortname=document.shortname,
            title=title,
            authors=authors,
            has_abstract=document.find_by_id("abstract") is not None,
        )

    def _read_title(self, document: SpecDocument) -> str:
        title_el = document.tree.find(".//title")
        title = normalize_space(title_el.text_content()) if title_el is not None else ""
        if not title:
            raise MissingTitleError(document.shortname)
        return title

    def _read_author_ids(self, document: SpecDocument) -> list[str]:
        """Collect author ids from every authorship <meta>, removing them."""
        author_ids: list[str] = []
        for meta in document.tree.xpath(AUTHORS_META_XPATH):
            content = meta.get("content") or ""
            for author_id in _AUTHOR_SEPARATOR.split(content):
                if author_id and author_id not in author_ids:
                    author_ids.append(author_id)
            meta.drop_tree()
        return author_ids
