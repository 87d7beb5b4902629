"""Base class for document transformers.

Transformers mutate a SpecDocument's tree in place. They never raise for
document-local problems; those are returned as BuildIssue records so the
build can carry on and report everything at once.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from schemas.document import SpecDocument
from schemas.report import BuildIssue


@dataclass
class TransformResult:
    """Issues found while transforming a document."""

    issues: list[BuildIssue] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return any(i.severity == "error" for i in self.issues)


class DocumentTransformer(ABC):
    """Abstract base class for in-place document transformers."""

    @abstractmethod
    def transform(self, document: SpecDocument) -> TransformResult:
        """Transform a document's tree in place.

        Args:
            document: The document to transform

        Returns:
            TransformResult with any issues found
        """
        pass
