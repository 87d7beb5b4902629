"""Tests for definition identifiers and reference resolution."""

import pytest

from spec_distiller.transformers.definition_resolver import (
    REFERENCE_CLASS,
    DefinitionResolver,
    slugify,
)


class TestSlugify:
    """Tests for the slugify helper."""

    def test_slugify_simple_term(self):
        """Lowercases and hyphenates a term under the dfn prefix."""
        assert slugify("Hash Chain") == "dfn-hash-chain"

    @pytest.mark.parametrize(
        "text",
        ["Hash Chain", "  spaced\n\tout  ", "CID (v1)", "", "ünïcödé", "a--b"],
    )
    def test_slugify_is_deterministic(self, text):
        """The same text always yields the same identifier."""
        assert slugify(text) == slugify(text)

    def test_slugify_collapses_whitespace(self):
        """Whitespace runs, including newlines, become a single hyphen."""
        assert slugify("  Content \n\n Identifier ") == "dfn-content-identifier"

    def test_slugify_empty_text_uses_placeholder(self):
        """Blank text is replaced with a placeholder token."""
        assert slugify("") == "dfn-empty"
        assert slugify("   \n") == "dfn-empty"
        assert slugify(None) == "dfn-empty"

    def test_slugify_collapses_punctuation(self):
        """Runs of non-word characters become a single hyphen."""
        assert slugify("CID (v1)") == "dfn-cid-v1"
        assert slugify("a -- b") == "dfn-a-b"

    def test_slugify_trims_edge_hyphens(self):
        """Leading and trailing hyphens are removed."""
        assert slugify("(DAG-CBOR)") == "dfn-dag-cbor"

    def test_slugify_keeps_underscores(self):
        """Underscores are word characters and survive."""
        assert slugify("snake_case") == "dfn-snake_case"

    def test_slugify_non_ascii_becomes_hyphen(self):
        """Non-ASCII letters are treated as non-word characters."""
        assert slugify("café au lait") == "dfn-caf-au-lait"

    def test_slugify_punctuation_only_text(self):
        """Text made only of punctuation reduces to the bare prefix."""
        assert slugify("!!!") == "dfn"

    def test_slugify_with_suffix(self):
        """A numeric suffix is appended after the text."""
        assert slugify("Node", suffix=1) == "dfn-node-1"
        assert slugify("Node", suffix=12) == "dfn-node-12"

    def test_slugify_zero_suffix_is_ignored(self):
        """A zero suffix is treated as no suffix."""
        assert slugify("Node", suffix=0) == "dfn-node"

    def test_slugify_custom_prefix(self):
        """The namespace prefix can be changed."""
        assert slugify("Node", prefix="term") == "term-node"


class TestDefinitionIds:
    """Tests for identifier assignment on <dfn> elements."""

    def test_assigns_slug_to_definition(self, make_document):
        """A definition gets an identifier derived from its text."""
        doc = make_document(body="<p><dfn>Hash Chain</dfn></p>")

        DefinitionResolver().transform(doc)

        dfn = doc.tree.find(".//dfn")
        assert dfn.get("id") == "dfn-hash-chain"

    def test_duplicate_definitions_get_suffixes(self, make_document):
        """The second definition of the same term gets a -1 suffix."""
        doc = make_document(body="<p><dfn>Node</dfn></p><p><dfn>Node</dfn></p>")

        DefinitionResolver().transform(doc)

        ids = [d.get("id") for d in doc.tree.iter("dfn")]
        assert ids == ["dfn-node", "dfn-node-1"]

    def test_many_collisions_are_unique(self, make_document):
        """N colliding definitions get N distinct ids, the first unsuffixed."""
        body = "".join("<p><dfn>Block</dfn></p>" for _ in range(5))
        doc = make_document(body=body)

        DefinitionResolver().transform(doc)

        ids = [d.get("id") for d in doc.tree.iter("dfn")]
        assert ids == ["dfn-block", "dfn-block-1", "dfn-block-2", "dfn-block-3", "dfn-block-4"]
        assert len(set(ids)) == 5

    def test_explicit_id_is_never_renamed(self, make_document):
        """A definition with an explicit id keeps it verbatim."""
        doc = make_document(body='<p><dfn id="CID">Content Identifier</dfn></p>')

        DefinitionResolver().transform(doc)

        assert doc.tree.find(".//dfn").get("id") == "CID"

    def test_collision_with_existing_element_id(self, make_document):
        """A derived id that clashes with any element id is suffixed."""
        doc = make_document(body='<section id="dfn-node"></section><p><dfn>Node</dfn></p>')

        DefinitionResolver().transform(doc)

        assert doc.tree.find(".//dfn").get("id") == "dfn-node-1"

    def test_collision_with_later_explicit_definition(self, make_document):
        """Explicit ids later in the document are already taken."""
        doc = make_document(body='<p><dfn>Node</dfn></p><p><dfn id="dfn-node">Node</dfn></p>')

        DefinitionResolver().transform(doc)

        ids = [d.get("id") for d in doc.tree.iter("dfn")]
        assert ids == ["dfn-node-1", "dfn-node"]

    def test_definition_count(self, make_document):
        """The result counts every definition."""
        doc = make_document(body="<p><dfn>A</dfn> <dfn>B</dfn> <dfn id='c'>C</dfn></p>")

        result = DefinitionResolver().transform(doc)

        assert result.definitions == 3


class TestReferenceResolution:
    """Tests for resolving bare links to definitions."""

    def test_link_resolves_to_definition(self, make_document):
        """A bare link whose text matches a definition is anchored to it."""
        doc = make_document(body="<p><dfn>Hash Chain</dfn></p><p>A <a>hash chain</a>.</p>")

        result = DefinitionResolver().transform(doc)

        link = doc.tree.xpath("//a")[0]
        assert link.get("href") == "#dfn-hash-chain"
        assert link.get("class") == REFERENCE_CLASS
        assert result.references == 1
        assert result.issues == []
        assert not result.failed

    def test_link_before_definition_resolves(self, make_document):
        """Links may appear before the definition they refer to."""
        doc = make_document(body="<p>See <a>Node</a>.</p><p><dfn>Node</dfn></p>")

        DefinitionResolver().transform(doc)

        assert doc.tree.xpath("//a")[0].get("href") == "#dfn-node"

    def test_link_matches_explicit_definition_id(self, make_document):
        """A link resolves to an explicit id equal to its derived slug."""
        doc = make_document(body='<p><dfn id="dfn-cid">Content Identifier</dfn></p><p><a>CID</a></p>')

        DefinitionResolver().transform(doc)

        assert doc.tree.xpath("//a")[0].get("href") == "#dfn-cid"

    def test_link_does_not_search_suffixes(self, make_document):
        """A link never matches a suffixed definition identifier."""
        doc = make_document(
            body='<section id="dfn-node"></section><p><dfn>Node</dfn></p><p><a>Node</a></p>'
        )

        result = DefinitionResolver().transform(doc)

        assert doc.tree.find(".//dfn").get("id") == "dfn-node-1"
        assert doc.tree.xpath("//a")[0].get("href") is None
        assert result.issues[0].subject == "dfn-node"

    def test_link_with_href_is_untouched(self, make_document):
        """Links that already have a target are not resolved."""
        doc = make_document(body='<p><dfn>Node</dfn></p><p><a href="https://x">Node</a></p>')

        result = DefinitionResolver().transform(doc)

        link = doc.tree.xpath("//a")[0]
        assert link.get("href") == "https://x"
        assert link.get("class") is None
        assert result.references == 0

    def test_link_does_not_match_non_definition_ids(self, make_document):
        """Only definition identifiers are valid link targets."""
        doc = make_document(body='<section id="dfn-intro"></section><p><a>Intro</a></p>')

        result = DefinitionResolver().transform(doc)

        assert doc.tree.xpath("//a")[0].get("href") is None
        assert len(result.issues) == 1

    def test_unresolved_link_is_reported(self, make_document):
        """A link with no matching definition is an error naming the document and text."""
        doc = make_document(shortname="masl", body="<p><a>Missing Thing</a></p>")

        result = DefinitionResolver().transform(doc)

        assert result.failed
        assert len(result.issues) == 1
        issue = result.issues[0]
        assert issue.kind == "unresolved-reference"
        assert issue.severity == "error"
        assert issue.document == "masl"
        assert issue.subject == "dfn-missing-thing"
        assert "Missing Thing" in issue.message
        assert doc.tree.xpath("//a")[0].get("href") is None

    def test_all_unresolved_links_are_reported(self, make_document):
        """Resolution continues past failures so every problem is surfaced."""
        doc = make_document(
            body="<p><dfn>Node</dfn></p><p><a>one</a> <a>Node</a> <a>two</a></p>"
        )

        result = DefinitionResolver().transform(doc)

        assert [i.subject for i in result.issues] == ["dfn-one", "dfn-two"]
        assert result.references == 1

    def test_link_text_with_markup(self, make_document):
        """A link's full text content is used, including nested elements."""
        doc = make_document(body="<p><dfn>Hash Chain</dfn></p><p><a><em>hash</em> chain</a></p>")

        DefinitionResolver().transform(doc)

        assert doc.tree.xpath("//a")[0].get("href") == "#dfn-hash-chain"
