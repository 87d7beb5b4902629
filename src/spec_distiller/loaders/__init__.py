"""Loaders for reading sources and writing published specs."""

from .corpus_loader import (
    discover_sources,
    load_bibliography,
    load_document,
    load_person_registry,
    shortname_for,
)
from .spec_writer import remove_spec, serialize_spec, write_spec

__all__ = [
    "discover_sources",
    "load_bibliography",
    "load_document",
    "load_person_registry",
    "shortname_for",
    "remove_spec",
    "serialize_spec",
    "write_spec",
]
