"""Schema definitions for Spec Distiller."""

from .bibliography import Bibliography
from .config import BuildConfig
from .document import DocumentMetadata, SpecDocument
from .person import Person, PersonRegistry
from .report import BuildIssue, BuildReport, DocumentResult

__all__ = [
    "Bibliography",
    "BuildConfig",
    "BuildIssue",
    "BuildReport",
    "DocumentMetadata",
    "DocumentResult",
    "Person",
    "PersonRegistry",
    "SpecDocument",
]
