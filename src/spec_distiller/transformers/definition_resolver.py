"""Definition identifiers and bare cross-reference resolution.

Every ``<dfn>`` gets an identifier derived from its text, and every ``<a>``
without an ``href`` is treated as a reference to the definition whose
identifier its own text derives to:

    <dfn>Hash Chain</dfn>  ->  <dfn id="dfn-hash-chain">Hash Chain</dfn>
    <a>hash chain</a>      ->  <a href="#dfn-hash-chain" class="dfn-ref">hash chain</a>
"""

import logging
import re
from dataclasses import dataclass

from schemas.document import SpecDocument
from schemas.report import BuildIssue

from .filters import normalize_space
from .transformer import DocumentTransformer, TransformResult

logger = logging.getLogger(__name__)

DEFINITION_PREFIX = "dfn"
EMPTY_PLACEHOLDER = "empty"
REFERENCE_CLASS = "dfn-ref"

# ASCII keeps identifiers stable regardless of the script of the term
_NON_WORD = re.compile(r"\W", re.ASCII)
_HYPHEN_RUN = re.compile(r"-{2,}")


def slugify(text: str | None, prefix: str = DEFINITION_PREFIX, suffix: int | None = None) -> str:
    """Derive an identifier from text content.

    Examples:
        >>> slugify("Hash  Chain")
        'dfn-hash-chain'
        >>> slugify("Node", suffix=1)
        'dfn-node-1'
        >>> slugify("   ")
        'dfn-empty'
    """
    txt = (normalize_space(text) or EMPTY_PLACEHOLDER).lower()
    txt = _NON_WORD.sub("-", txt)
    txt = _HYPHEN_RUN.sub("-", txt)
    txt = re.sub(r"^-|-$", "", txt)
    parts = [prefix, txt, str(suffix) if suffix else ""]
    return "-".join(p for p in parts if p)


@dataclass
class ResolutionResult(TransformResult):
    """Outcome of resolving one document."""

    definitions: int = 0
    references: int = 0


class DefinitionResolver(DocumentTransformer):
    """Assign identifiers to definitions and resolve bare links to them."""

    def transform(self, document: SpecDocument) -> ResolutionResult:
        """Resolve definitions and references in a document.

        Args:
            document: The document to resolve

        Returns:
            ResolutionResult with counts and unresolved-reference errors
        """
        result = ResolutionResult()
        definition_ids = self.assign_definition_ids(document)
        result.definitions = len(definition_ids)

        for link in document.tree.xpath("//a[not(@href)]"):
            text = link.text_content()
            target = slugify(text)
            if target in definition_ids:
                link.set("href", f"#{target}")
                link.set("class", REFERENCE_CLASS)
                result.references += 1
                continue
            message = f'Empty link "{normalize_space(text)}" (#{target}) has no matching dfn.'
            logger.error(f"{document.shortname}: {message}")
            result.issues.append(
                BuildIssue(
                    kind="unresolved-reference",
                    document=document.shortname,
                    subject=target,
                    message=message,
                )
            )

        logger.debug(
            f"{document.shortname}: {result.definitions} definitions, "
            f"{result.references} references resolved"
        )
        return result

    def assign_definition_ids(self, document: SpecDocument) -> set[str]:
        """Give every <dfn> a document-unique identifier.

        Explicit identifiers are kept as they are. Derived ones that collide
        with any identifier already in the document get a numeric suffix,
        in document order.

        Returns:
            The identifiers of all definitions in the document
        """
        taken = set(document.tree.xpath("//@id"))
        definition_ids: set[str] = set()

        for dfn in document.tree.iter("dfn"):
            explicit = dfn.get("id")
            if explicit:
                definition_ids.add(explicit)
                continue

            text = dfn.text_content()
            suffix = 0
            candidate = slugify(text)
            while candidate in taken:
                suffix += 1
                candidate = slugify(text, suffix=suffix)

            dfn.set("id", candidate)
            taken.add(candidate)
            definition_ids.add(candidate)

        return definition_ids
