"""Self-citation synthesis.

Every spec in the corpus gets a bibliography entry keyed by its short name,
built from its own metadata, so that specs can cite each other (and
themselves) no matter which order they are processed in.
"""

import logging
from typing import Iterable

from schemas.bibliography import Bibliography
from schemas.config import BuildConfig
from schemas.document import DocumentMetadata
from schemas.report import BuildIssue
from spec_distiller.transformers.filters import escape_html, join_names

logger = logging.getLogger(__name__)


def htmlify_reference(author: str, title: str, date: str, url: str) -> str:
    """Render a citation fragment from raw (unescaped) fields.

    Examples:
        >>> htmlify_reference("Ann & Bob", "CIDs", "2026-01-15", "https://dasl.ing/cid.html")
        'Ann &amp; Bob. <a href="https://dasl.ing/cid.html"><cite>CIDs</cite></a>. 2026-01-15. URL:&nbsp;<a href="https://dasl.ing/cid.html">https://dasl.ing/cid.html</a>'
    """
    author, title, date, url = (escape_html(v) for v in (author, title, date, url))
    return (
        f'{author}. <a href="{url}"><cite>{title}</cite></a>. {date}. '
        f'URL:&nbsp;<a href="{url}">{url}</a>'
    )


class SelfCitationCompiler:
    """Build and merge self-citations for a corpus.

    Attributes:
        config: Build configuration (provides canonical spec URLs)
        build_date: Date stamped on every citation in this build (YYYY-MM-DD)
    """

    def __init__(self, config: BuildConfig, build_date: str):
        self.config = config
        self.build_date = build_date

    def cite(self, metadata: DocumentMetadata) -> str:
        """Render the self-citation fragment for one document."""
        return htmlify_reference(
            author=join_names([person.name for person in metadata.authors]),
            title=metadata.title,
            date=self.build_date,
            url=self.config.spec_url(metadata.shortname),
        )

    def compile(
        self,
        corpus: Iterable[DocumentMetadata],
        bibliography: Bibliography,
    ) -> list[BuildIssue]:
        """Merge a self-citation for every document into the bibliography.

        A self-citation replaces any hand-authored entry with the same key.
        Each replacement is logged and reported as a warning.

        Returns:
            bibliography-override warnings
        """
        issues: list[BuildIssue] = []
        count = 0
        for metadata in corpus:
            fragment = self.cite(metadata)
            previous = bibliography.put(metadata.shortname, fragment)
            count += 1
            if previous is not None:
                message = (
                    f'Hand-authored bibliography entry "{metadata.shortname}" '
                    "replaced by the spec's self-citation"
                )
                logger.warning(f"{metadata.shortname}: {message}")
                issues.append(
                    BuildIssue(
                        severity="warning",
                        kind="bibliography-override",
                        document=metadata.shortname,
                        subject=metadata.shortname,
                        message=message,
                    )
                )
        logger.info(f"Merged {count} self-citations into the bibliography")
        return issues
