"""Pytest fixtures for Spec Distiller tests."""

import json
from pathlib import Path

import pytest
from lxml import html

from schemas.config import BuildConfig
from schemas.document import SpecDocument
from schemas.person import PersonRegistry

@pytest.fixture
def sample_persons():
    """Person registry data covering the default fallback editors."""
    return {
        "robin": {
            "name": "Robin Berjon",
            "email": "robin@berjon.com",
            "site": "https://berjon.com/",
        },
        "bumblefudge": {
            "name": "Juan Caballero",
            "email": "bumblefudge@learningproof.xyz",
            "site": "https://bumblefudge.com/",
        },
        "ann": {
            "name": "Ann Example",
            "email": "ann@example.com",
            "site": "https://ann.example.com/",
        },
    }


@pytest.fixture
def registry(sample_persons):
    return PersonRegistry.model_validate(sample_persons)


@pytest.fixture
def sample_bibliography():
    """Hand-authored bibliography entries."""
    return {
        "rfc8259": 'T. Bray. <a href="https://www.rfc-editor.org/rfc/rfc8259"><cite>JSON</cite></a>. 2017.',
        "multiformats": '<a href="https://multiformats.io/"><cite>Multiformats</cite></a>.',
    }


def make_source(
    title: str = "Test Spec",
    body: str = '<section id="abstract"><p>An abstract.</p></section>',
    authors: str | None = None,
) -> str:
    """Render a minimal source document."""
    meta = f'<meta name="authors" content="{authors}">' if authors is not None else ""
    return (
        "<!DOCTYPE html>\n"
        f"<html><head><meta charset=\"utf-8\"><title>{title}</title>{meta}</head>"
        f"<body>{body}</body></html>"
    )


@pytest.fixture
def make_document():
    """Parse a minimal source into a SpecDocument without touching disk."""

    def _make(shortname: str = "test", **kwargs) -> SpecDocument:
        tree = html.document_fromstring(make_source(**kwargs))
        return SpecDocument(
            shortname=shortname,
            source_path=Path(f"{shortname}.src.html"),
            tree=tree,
        )

    return _make


@pytest.fixture
def spec_dir(tmp_path, sample_persons, sample_bibliography):
    """Source directory with a person registry and a bibliography, no sources."""
    (tmp_path / "persons.json").write_text(json.dumps(sample_persons))
    (tmp_path / "bibliography.json").write_text(json.dumps(sample_bibliography))
    return tmp_path


@pytest.fixture
def config(spec_dir):
    return BuildConfig(source_dir=spec_dir)


@pytest.fixture
def write_source(spec_dir):
    """Write a source file into the spec directory."""

    def _write(shortname: str, **kwargs):
        path = spec_dir / f"{shortname}.src.html"
        path.write_text(make_source(**kwargs))
        return path

    return _write
