"""Build configuration schema."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class BuildConfig(BaseModel):
    """Settings for a corpus build.

    Attributes:
        source_dir: Directory scanned (non-recursively) for sources
        output_dir: Directory for published HTML (default: source_dir)
        source_suffix: Filename suffix identifying sources
        bibliography_file: Hand-authored bibliography, relative to source_dir
        persons_file: Person registry, relative to source_dir
        base_url: Site root used for canonical spec URLs
        project_name: Name shown in page titles and the nav bar
        issues_url: Issue tracker linked from the header (optional)
        stylesheet: Stylesheet href added to every page
        copy_script: Script href for the copy-page button
        fallback_authors: Editors used when a source declares none
    """

    source_dir: Path
    output_dir: Path | None = None
    source_suffix: str = ".src.html"
    bibliography_file: str = "bibliography.json"
    persons_file: str = "persons.json"
    base_url: str = "https://dasl.ing"
    project_name: str = "DASL"
    issues_url: str | None = "https://github.com/darobin/dasl.ing/issues"
    stylesheet: str = "spec.css"
    copy_script: str = "copy-page.js"
    fallback_authors: list[str] = Field(default_factory=lambda: ["robin", "bumblefudge"])

    @field_validator("fallback_authors")
    @classmethod
    def _non_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one fallback author is required")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def resolved_output_dir(self) -> Path:
        return self.output_dir or self.source_dir

    @property
    def bibliography_path(self) -> Path:
        return self.source_dir / self.bibliography_file

    @property
    def persons_path(self) -> Path:
        return self.source_dir / self.persons_file

    def spec_url(self, shortname: str) -> str:
        """Canonical absolute URL of a published spec."""
        return f"{self.base_url}/{shortname}.html"
