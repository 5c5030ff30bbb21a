from lxml import etree

from folio.dialect import AtomDialect, RssDialect, detect_dialect


def _doc(xml: str):
    return etree.fromstring(xml)


# ── detect_dialect ────────────────────────────────────────────

class TestDetectDialect:
    def test_rss(self):
        dialect, items = detect_dialect(_doc("<rss><channel><item/><item/></channel></rss>"))
        assert isinstance(dialect, RssDialect)
        assert len(items) == 2

    def test_atom_with_entries(self):
        dialect, items = detect_dialect(_doc('<feed xmlns="http://www.w3.org/2005/Atom"><entry/></feed>'))
        assert isinstance(dialect, AtomDialect)
        assert len(items) == 1

    def test_empty_atom_feed(self):
        dialect, items = detect_dialect(_doc('<feed xmlns="http://www.w3.org/2005/Atom"><title>t</title></feed>'))
        assert isinstance(dialect, AtomDialect)
        assert items == []

    def test_prefixed_atom_root(self):
        dialect, _ = detect_dialect(_doc('<atom:feed xmlns:atom="http://www.w3.org/2005/Atom"/>'))
        assert dialect.name == "atom"

    def test_entries_win_over_items(self):
        dialect, items = detect_dialect(_doc("<root><item/><entry/><entry/></root>"))
        assert isinstance(dialect, AtomDialect)
        assert [etree.QName(el).localname for el in items] == ["entry", "entry"]

    def test_rdf_is_rss(self):
        xml = (
            '<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" '
            'xmlns="http://purl.org/rss/1.0/"><channel/><item/></rdf:RDF>'
        )
        dialect, items = detect_dialect(_doc(xml))
        assert isinstance(dialect, RssDialect)
        assert len(items) == 1

    def test_no_items(self):
        dialect, items = detect_dialect(_doc("<rss><channel/></rss>"))
        assert isinstance(dialect, RssDialect)
        assert items == []

    def test_single_entry_document(self):
        _, items = detect_dialect(_doc('<entry xmlns="http://www.w3.org/2005/Atom"><id>1</id></entry>'))
        assert len(items) == 1


# ── extract_link ──────────────────────────────────────────────

class TestExtractLink:
    def test_atom_prefers_alternate(self):
        entry = _doc(
            '<entry xmlns="http://www.w3.org/2005/Atom">'
            '<link rel="self" href="B"/><link rel="alternate" href="A"/></entry>'
        )
        assert AtomDialect().extract_link(entry) == "A"

    def test_atom_first_href_without_alternate(self):
        entry = _doc('<entry><link rel="self" href="B"/><link href="C"/></entry>')
        assert AtomDialect().extract_link(entry) == "B"

    def test_atom_falls_back_to_text(self):
        entry = _doc("<entry><link>https://example.com/text</link></entry>")
        assert AtomDialect().extract_link(entry) == "https://example.com/text"

    def test_atom_ignores_nested_links(self):
        entry = _doc('<entry><source><link rel="alternate" href="S"/></source><link href="E"/></entry>')
        assert AtomDialect().extract_link(entry) == "E"

    def test_rss_text(self):
        item = _doc("<item><link>  https://example.com/post  </link></item>")
        assert RssDialect().extract_link(item) == "https://example.com/post"

    def test_rss_ignores_href(self):
        item = _doc('<item><link href="https://example.com/attr"/></item>')
        assert RssDialect().extract_link(item) == ""

    def test_nothing(self):
        assert RssDialect().extract_link(_doc("<item/>")) == ""
        assert AtomDialect().extract_link(_doc("<entry/>")) == ""
