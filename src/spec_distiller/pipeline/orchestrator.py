"""Two-phase corpus build.

Phase 1 indexes the whole corpus: every source is loaded, its metadata is
extracted and its self-citation is merged into the bibliography. Only once
that bibliography is complete does phase 2 start publishing documents, so a
spec can cite a spec that comes after it in file-listing order.
"""

import logging
from datetime import datetime, timezone

from schemas.bibliography import Bibliography
from schemas.config import BuildConfig
from schemas.document import DocumentMetadata, SpecDocument
from schemas.person import PersonRegistry
from schemas.report import BuildIssue, BuildReport, DocumentResult
from spec_distiller.compilers.self_citation import SelfCitationCompiler
from spec_distiller.loaders.corpus_loader import (
    discover_sources,
    load_bibliography,
    load_document,
    load_person_registry,
)
from spec_distiller.loaders.spec_writer import write_spec
from spec_distiller.transformers.citation_expander import CitationExpander
from spec_distiller.transformers.definition_resolver import DefinitionResolver
from spec_distiller.transformers.metadata_extractor import MetadataExtractor
from spec_distiller.transformers.page_assembler import PageAssembler

logger = logging.getLogger(__name__)


def today() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


class SpecBuilder:
    """Build every spec in a source directory.

    Fatal problems (unreadable JSON inputs, unknown authors, untitled
    sources) raise before anything is written. Document-local problems are
    collected in the returned BuildReport.

    Attributes:
        config: Build configuration
        build_date: Fixed build date, or None to use today's UTC date
    """

    def __init__(self, config: BuildConfig, build_date: str | None = None):
        self.config = config
        self.build_date = build_date

    def build(self) -> BuildReport:
        """Run a complete build.

        Returns:
            BuildReport describing every document and issue

        Raises:
            SpecDistillerError: On any fatal configuration or input error
        """
        build_date = self.build_date or today()
        report = BuildReport(build_date=build_date)

        registry = load_person_registry(self.config.persons_path)
        bibliography = load_bibliography(self.config.bibliography_path)
        documents = [
            load_document(path, self.config.source_suffix)
            for path in discover_sources(self.config.source_dir, self.config.source_suffix)
        ]
        if not documents:
            logger.warning(f"No sources found in {self.config.source_dir}")
            return report

        metadata, issues = self.index_corpus(documents, registry, bibliography, build_date)
        report.issues.extend(issues)

        closed_bibliography = bibliography.freeze()
        assembler = PageAssembler(self.config, metadata, build_date)
        resolver = DefinitionResolver()
        expander = CitationExpander(closed_bibliography)

        for document in documents:
            result, issues = self.publish_document(document, assembler, resolver, expander)
            report.documents.append(result)
            report.issues.extend(issues)

        failed = sum(1 for d in report.documents if d.failed)
        logger.info(
            f"Built {len(report.documents)} specs "
            f"({failed} with errors, {len(report.warnings)} warnings)"
        )
        return report

    def index_corpus(
        self,
        documents: list[SpecDocument],
        registry: PersonRegistry,
        bibliography: Bibliography,
        build_date: str,
    ) -> tuple[dict[str, DocumentMetadata], list[BuildIssue]]:
        """Extract metadata for every document and merge self-citations.

        Returns:
            Metadata by short name, and bibliography-override warnings
        """
        extractor = MetadataExtractor(registry, self.config.fallback_authors)
        metadata = {doc.shortname: extractor.extract(doc) for doc in documents}

        compiler = SelfCitationCompiler(self.config, build_date)
        issues = compiler.compile(metadata.values(), bibliography)
        return metadata, issues

    def publish_document(
        self,
        document: SpecDocument,
        assembler: PageAssembler,
        resolver: DefinitionResolver,
        expander: CitationExpander,
    ) -> tuple[DocumentResult, list[BuildIssue]]:
        """Assemble, resolve, expand and write a single document."""
        logger.info(f'--- Processing {document.shortname} "{document.title}" ---')

        assembled = assembler.transform(document)
        resolved = resolver.transform(document)
        expanded = expander.transform(document)
        output_path = write_spec(document, self.config.resolved_output_dir)

        issues = assembled.issues + resolved.issues + expanded.issues
        result = DocumentResult(
            shortname=document.shortname,
            title=document.title,
            output_path=str(output_path),
            definitions=resolved.definitions,
            references=resolved.references,
            citations=expanded.citations,
            failed=any(i.severity == "error" for i in issues),
        )
        return result, issues

