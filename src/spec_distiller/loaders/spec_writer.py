"""Writing published specs to disk."""

import logging
from pathlib import Path

from lxml import html

from schemas.document import SpecDocument

from .corpus_loader import DEFAULT_SOURCE_SUFFIX, shortname_for

logger = logging.getLogger(__name__)

DOCTYPE = "<!DOCTYPE html>"


def output_path_for(source_path: Path, output_dir: Path, suffix: str = DEFAULT_SOURCE_SUFFIX) -> Path:
    return output_dir / f"{shortname_for(source_path, suffix)}.html"


def serialize_spec(document: SpecDocument) -> str:
    """Serialize a document tree to an HTML5 string."""
    return html.tostring(
        document.tree,
        doctype=DOCTYPE,
        encoding="unicode",
        method="html",
    )


def write_spec(document: SpecDocument, output_dir: Path) -> Path:
    """Write a document to ``<output_dir>/<shortname>.html``.

    Returns:
        Path of the written file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{document.shortname}.html"
    path.write_text(serialize_spec(document), encoding="utf-8")
    document.output_path = path
    logger.debug(f"Wrote {path}")
    return path


def remove_spec(source_path: Path, output_dir: Path, suffix: str = DEFAULT_SOURCE_SUFFIX) -> bool:
    """Delete the published counterpart of a removed source.

    Returns:
        True if a file was removed
    """
    path = output_path_for(source_path, output_dir, suffix)
    if path.exists():
        path.unlink()
        logger.info(f"Removed {path}")
        return True
    return False
