"""Transformers for processing specification documents."""

from .citation_expander import CitationExpander, ExpansionResult
from .definition_resolver import DefinitionResolver, ResolutionResult, slugify
from .metadata_extractor import MetadataExtractor
from .page_assembler import PageAssembler
from .transformer import DocumentTransformer, TransformResult

__all__ = [
    "CitationExpander",
    "DefinitionResolver",
    "DocumentTransformer",
    "ExpansionResult",
    "MetadataExtractor",
    "PageAssembler",
    "ResolutionResult",
    "TransformResult",
    "slugify",
]
