"""Build report schemas.

A build accumulates document-local problems instead of stopping at the first
one, so that a single run surfaces every broken reference in the corpus.
"""

from typing import Literal

from pydantic import BaseModel

IssueKind = Literal[
    "missing-abstract",
    "unresolved-reference",
    "unresolved-citation",
    "bibliography-override",
]


class BuildIssue(BaseModel):
    """A document-local error or warning.

    Attributes:
        severity: "error" marks the document (and build) as failed
        kind: Category of problem
        document: Short name of the document concerned
        subject: Offending text, identifier or citation key
        message: Human-readable description
    """

    severity: Literal["error", "warning"] = "error"
    kind: IssueKind
    document: str
    subject: str = ""
    message: str

    def __str__(self) -> str:
        return f"[{self.document}] {self.message}"


class DocumentResult(BaseModel):
    """Outcome of processing one document.

    Attributes:
        shortname: Document short name
        title: Document title
        output_path: Path of the published file
        definitions: Number of definition sites given identifiers
        references: Number of reference links resolved
        citations: Citation keys used by the document, sorted
        failed: True if any error was recorded for this document
    """

    shortname: str
    title: str
    output_path: str | None = None
    definitions: int = 0
    references: int = 0
    citations: list[str] = []
    failed: bool = False


class BuildReport(BaseModel):
    """Result of a complete corpus build.

    Attributes:
        build_date: Date stamped on every document in this build (YYYY-MM-DD)
        documents: Per-document results in processing order
        issues: All recorded errors and warnings
    """

    build_date: str
    documents: list[DocumentResult] = []
    issues: list[BuildIssue] = []

    @property
    def errors(self) -> list[BuildIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[BuildIssue]:
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def ok(self) -> bool:
        return not self.errors
