import pytest

from . import (
    EXAMPLE_DOMAIN,
    HELLO_WORLD,
    SiftTest,
)
from tagsift.document import Document
from tagsift.element import Element
from tagsift.scanner import Scanner


class TestFilter(SiftTest):

    def test_filter_by_tag_name(self):
        document = self.document(HELLO_WORLD)
        divs = document.filter("div")
        assert divs.is_whole_document is False
        self.assert_names(divs, ["div"])
        assert divs[0].decode_contents() == "Hello World!"
        assert divs[0].get_attr_value("id") == "hello"
        assert divs.get_attr_value("id") == "hello"

    def test_filter_then_get_text(self):
        document = self.document(HELLO_WORLD)
        assert document.filter("body")[0].get_text() == "Hello World!"
        assert document.filter("body").get_text() == "Hello World!"
        assert document.filter("div", "id")[0].get_text() == "Hello World!"

    def test_drill_down_keeps_match(self):
        document = self.document(HELLO_WORLD)
        assert document.filter(("div", "id")).decode_contents() == "Hello World!"
        assert document.filter("div", "id").decode_contents() == "Hello World!"

    @pytest.mark.parametrize(
        "selector",
        [
            ("div", "id", "hello"),
            ("", "", "hello"),
            ("*", "*", "hello"),
            ("", "id", "hello"),
            ("*", "id"),
        ]
    )
    def test_filter_shapes(self, selector):
        document = self.document(HELLO_WORLD)
        matches = document.filter(selector)
        self.assert_names(matches, ["div"])
        assert matches[0].get_text() == "Hello World!"

    def test_tag_name_is_case_insensitive(self):
        document = self.document("<HTML><Body><DIV>x</DIV></Body></HTML>")
        assert document.filter("div").decode() == "<DIV>x</div>"
        assert document.filter("DIV").decode() == "<DIV>x</div>"

    def test_nested_heading_text(self):
        document = self.document(EXAMPLE_DOMAIN)
        h1 = document.filter("h1")
        assert h1[0].get_text() == "Example Domain"
        assert h1.get_text() == "Example Domain"

    def test_filter_at_any_depth(self):
        document = self.document(EXAMPLE_DOMAIN)
        links = document.filter("a", "href")
        assert links.get_attr_value("href") == "https://www.iana.org/domains/example"
        assert links.get_text() == "More information..."

        metas = document.filter("meta", "name", "viewport")
        assert metas.get_attr_value("content") == "width=device-width, initial-scale=1"

    def test_style_is_not_text(self):
        document = self.document(EXAMPLE_DOMAIN)
        head_text = document.filter("head").get_text()
        assert "Example Domain" in head_text
        assert "background-color" not in head_text

    def test_unconstrained_filter_is_identity(self):
        document = self.document(EXAMPLE_DOMAIN)
        for selector in [(), ("",), ("", "", ""), ("*", "*", "*")]:
            same = document.filter(*selector)
            assert same == document
            assert same is not document
            assert same.is_whole_document is True
            assert same.decode() == document.decode()

        matches = document.filter("p")
        same = matches.filter("", "", "")
        assert same == matches
        assert same.is_whole_document is False

    def test_filter_is_idempotent_on_tag_name(self):
        document = self.document(EXAMPLE_DOMAIN)
        once = document.filter("p")
        twice = once.filter("p")
        assert once.elements == twice.elements
        assert len(once) == 2

    @pytest.mark.parametrize(
        "tag, attr, value",
        [
            ("meta", "name", "viewport"),
            ("meta", "charset", "utf-8"),
            ("a", "href", "nowhere"),
            ("style", "type", "text/css"),
        ]
    )
    def test_filter_narrows_monotonically(self, tag, attr, value):
        document = self.document(EXAMPLE_DOMAIN)
        broad = list(document.filter(tag))
        narrow = list(document.filter(tag, attr, value))
        # Every narrow match appears in the broad result, in order.
        remaining = iter(broad)
        assert all(any(x is y or x == y for y in remaining) for x in narrow)
        assert len(narrow) <= len(broad)

    def test_filter_keeps_source_order_and_duplicates(self):
        document = self.document(
            "<div><p class=a>1</p><p class=b>2</p><p class=a>1</p></div>"
        )
        matches = document.filter("p", "class")
        assert [x.opening_markup for x in matches] == [
            "<p class=a>", "<p class=b>", "<p class=a>"
        ]
        # Rendering drops exact repeats.
        assert matches.decode() == "<p class=a>1</p><p class=b>2</p>"
        assert matches.decode_contents() == "12"
        assert matches.get_text() == "12"

    def test_match_scope_filter_does_not_rescan(self):
        class CountingScanner(Scanner):
            calls = 0

            def scan(self, markup):
                CountingScanner.calls += 1
                return super(CountingScanner, self).scan(markup)

        class CountingDocument(Document):
            scanner_class = CountingScanner

        document = CountingDocument.from_markup(HELLO_WORLD)
        assert CountingScanner.calls == 1

        divs = document.filter("div")
        assert isinstance(divs, CountingDocument)
        assert CountingScanner.calls == 2

        divs.filter("div", "id").filter("", "", "hello")
        assert CountingScanner.calls == 2

    def test_whole_document_filter_only_sees_first_root(self):
        # Filtering a whole document re-scans its rendered markup, and
        # a whole document renders as its first element.
        document = self.document("<p>a</p><p>b</p>")
        assert len(document) == 2
        self.assert_names(document.filter("p"), ["p"])
        assert document.filter("p").get_text() == "a"

    def test_zero_matches(self):
        document = self.document(HELLO_WORLD)
        nothing = document.filter("table")
        assert len(nothing) == 0
        assert nothing.is_whole_document is False
        assert nothing.filter("table", "id", "x").elements == ()
        assert nothing.decode() == ""
        assert nothing.decode_contents() == ""
        assert nothing.get_text() == ""
        assert nothing.get_attr_value("id") == ""

        nothing = document.filter("div", "class")
        assert len(nothing) == 0
        nothing = document.filter("div", "id", "goodbye")
        assert len(nothing) == 0

    def test_attribute_value_forms(self):
        document = self.document(
            "<ul>"
            '<li data-x="v">1</li>'
            "<li data-x='v'>2</li>"
            "<li data-x=v>3</li>"
            "<li data-x=v class=y>4</li>"
            '<li data-x="vv">5</li>'
            "</ul>"
        )
        assert document.filter("li", "data-x", "v").get_text() == "1234"


class TestRendering(SiftTest):

    def test_whole_document_renders_root_only(self):
        markup = "<html><body><div><p>a</p><p>b</p></div></body></html>"
        document = self.document(markup)
        assert document.decode() == markup
        assert str(document) == markup
        assert document.decode_contents() == "<body><div><p>a</p><p>b</p></div></body>"
        assert document.get_text() == "ab"

    def test_whole_document_skips_leading_junk(self):
        document = self.document("<!DOCTYPE html>\n<!-- hi -->\n<html>x</html>")
        assert document.decode() == "<html>x</html>"

    def test_whole_document_closes_unclosed_root(self):
        document = self.document("<html><p>text")
        assert document.decode() == "<html><p>text</html>"

    def test_attribute_values_ignore_whole_document_shortcut(self):
        document = self.document(
            "<div id=a><p id=b>x</p><p id=a>y</p><p id=c>z</p></div>"
        )
        assert document.decode_contents() == "<p id=b>x</p><p id=a>y</p><p id=c>z</p>"
        assert document.get_attr_value("id") == "abc"
        assert document.get_attr_value("class") == ""

    def test_match_scope_renders_every_element(self):
        document = self.document(EXAMPLE_DOMAIN)
        paragraphs = document.filter("p")
        assert paragraphs.get_text() == (
            "This domain is for use in illustrative examples in documents."
            "More information..."
        )
        assert paragraphs.decode().startswith("<p>This domain")
        assert paragraphs.decode().endswith("More information...</a></p>")

    def test_nested_matches_are_each_rendered(self):
        document = self.document("<div><div>x</div></div>")
        divs = document.filter("div")
        assert divs.decode() == "<div><div>x</div></div><div>x</div>"
        assert divs.decode_contents() == "<div>x</div>x"
        # Both elements have the same text, so it's only included once.
        assert divs.get_text() == "x"

    def test_get_text_separator_and_strip(self):
        document = self.document(EXAMPLE_DOMAIN)
        paragraphs = document.filter("p")
        assert paragraphs.get_text("\n", strip=True) == (
            "This domain is for use in illustrative examples in documents.\n"
            "More information..."
        )
        assert paragraphs.text == paragraphs.get_text()
        assert paragraphs.getText() == paragraphs.get_text()

        body = document.filter("body")
        assert body.get_text(" ", strip=True) == (
            "Example Domain "
            "This domain is for use in illustrative examples in documents. "
            "More information..."
        )


class TestDocument(SiftTest):

    def test_empty_document(self):
        for document in (Document(), Document(is_whole_document=True)):
            assert len(document) == 0
            assert list(document) == []
            assert document.decode() == ""
            assert document.decode_contents() == ""
            assert document.get_text() == ""
            assert document.get_attr_value("id") == ""
            assert document.filter("div").elements == ()
            assert document.filter("div", "id", "x").decode() == ""

    def test_blank_named_elements_are_not_rendered(self):
        blank = Element(" ", "< >", "ignored")
        for is_whole_document in (True, False):
            document = Document([blank, blank], is_whole_document)
            assert document.decode() == ""
            assert document.decode_contents() == ""
            assert document.get_text() == ""

        document = Document(
            [blank, Element("p", "<p>", "x")], is_whole_document=True
        )
        assert document.decode() == "<p>x</p>"

    def test_from_markup_never_fails(self):
        document = Document.from_markup("no tags here")
        assert document.is_whole_document is True
        assert len(document) == 0
        assert document.decode() == ""

    def test_sequence_protocol(self):
        document = self.document(HELLO_WORLD)
        assert len(document) == 3
        self.assert_names(document, ["html", "body", "div"])
        assert document[-1].name == "div"
        self.assert_names(document[1:], ["body", "div"])
        assert document.elements == tuple(document)

    def test_documents_are_values(self):
        document = self.document(HELLO_WORLD)
        before = document.elements
        document.filter("div")
        document.filter("div").filter("div", "id")
        assert document.elements == before
        assert document.is_whole_document is True
        with pytest.raises(AttributeError):
            document.elements = ()

    def test_equality(self):
        a = self.document(HELLO_WORLD)
        assert a == self.document(HELLO_WORLD)
        assert a != Document(a.elements, is_whole_document=False)
        assert a != a.elements

    def test_repr(self):
        document = Document([Element("p", "<p>", "x")])
        assert repr(document) == (
            "<Document is_whole_document=False elements="
            "[<Element name='p' opening_markup='<p>' inner_markup='x'>]>"
        )
