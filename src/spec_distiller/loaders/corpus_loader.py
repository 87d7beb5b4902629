"""Corpus loading: source discovery, HTML parsing and JSON inputs.

Sources live flat in a single directory next to ``bibliography.json`` and
``persons.json``:

    specs/
    ├── bibliography.json
    ├── persons.json
    ├── cid.src.html        # -> cid.html
    └── masl.src.html       # -> masl.html
"""

import json
import logging
from pathlib import Path

from lxml import etree, html
from pydantic import BaseModel, ValidationError

from schemas.bibliography import Bibliography
from schemas.document import SpecDocument
from schemas.person import PersonRegistry
from spec_distiller.exceptions import MalformedInputError

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_SUFFIX = ".src.html"


def shortname_for(source_path: Path, suffix: str = DEFAULT_SOURCE_SUFFIX) -> str:
    """Derive a document short name from its source filename.

    Examples:
        >>> shortname_for(Path("specs/cid.src.html"))
        'cid'
    """
    name = source_path.name
    if name.endswith(suffix):
        return name[: -len(suffix)]
    return source_path.stem


def discover_sources(source_dir: Path, suffix: str = DEFAULT_SOURCE_SUFFIX) -> list[Path]:
    """List source files in a directory, sorted by filename.

    Only the top level of the directory is scanned.
    """
    sources = sorted(
        p for p in source_dir.iterdir() if p.is_file() and p.name.endswith(suffix)
    )
    logger.debug(f"Discovered {len(sources)} sources in {source_dir}")
    return sources


def load_document(source_path: Path, suffix: str = DEFAULT_SOURCE_SUFFIX) -> SpecDocument:
    """Parse a source file into a SpecDocument.

    The parsed tree always has a <head> and a <body>, even when the source
    omits them.

    Raises:
        MalformedInputError: If the source is not UTF-8 or has no markup
    """
    try:
        text = source_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInputError(
            f"Source is not valid UTF-8 ({source_path}): {e}", path=source_path
        ) from e
    try:
        tree = html.document_fromstring(text, ensure_head_body=True)
    except etree.ParserError as e:
        raise MalformedInputError(
            f"Source could not be parsed ({source_path}): {e}", path=source_path
        ) from e
    shortname = shortname_for(source_path, suffix)
    logger.debug(f"Loaded {shortname} from {source_path}")
    return SpecDocument(shortname=shortname, source_path=source_path, tree=tree)


def _load_json_model(path: Path, model: type[BaseModel], label: str):
    if not path.exists():
        raise MalformedInputError(f"{label} not found: {path}", path=path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"{label} is not valid JSON ({path}): {e}", path=path) from e
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedInputError(
            f"{label} failed validation ({path}): {e.error_count()} errors",
            path=path,
            errors=e.errors(),
        ) from e


def load_person_registry(path: Path) -> PersonRegistry:
    """Load and validate the person registry.

    Raises:
        MalformedInputError: If the file is missing, not JSON, or not shaped
            as ``{id: {name, email, site}}``
    """
    registry = _load_json_model(path, PersonRegistry, "Person registry")
    logger.debug(f"Loaded {len(registry)} people from {path}")
    return registry


def load_bibliography(path: Path) -> Bibliography:
    """Load and validate the hand-authored bibliography.

    Raises:
        MalformedInputError: If the file is missing, not JSON, or not a
            mapping of citation keys to strings
    """
    bibliography = _load_json_model(path, Bibliography, "Bibliography")
    logger.debug(f"Loaded {len(bibliography)} bibliography entries from {path}")
    return bibliography
