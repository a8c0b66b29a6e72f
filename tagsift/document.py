from __future__ import annotations
from typing import (
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Union,
)

from tagsift._typing import (
    _ElementRenderFunction,
    _SelectorComponent,
)
from tagsift.element import Element
from tagsift.scanner import Scanner
from tagsift.selector import Selector


class Document(object):
    """An ordered collection of `Element` objects: either everything
    found in a markup document, or the subset of it that matched a
    `Selector`.

    A `Document` straight out of `parse_html` has *whole-document
    scope*. Rendering it as markup, inner markup or text renders only
    its first element, which is the root of the parsed document; the
    rest of the elements are nested inside that one, and rendering them
    too would just repeat their markup.

    A `Document` returned by `filter` has *match scope*. Rendering it
    renders every element in it, skipping exact repeats, and
    concatenates the results.

    Documents never change. `filter` always returns a new one.

    :param elements: The elements, in source order.
    :param is_whole_document: True if this is the unfiltered output of
        the scanner.
    """

    #: Used to re-scan the markup of a whole document when it's
    #: filtered.
    scanner_class: type = Scanner

    def __init__(self, elements: Iterable[Element] = (),
                 is_whole_document: bool = False):
        self._elements = tuple(elements)
        self._is_whole_document = is_whole_document

    @classmethod
    def from_markup(cls, markup: str) -> Document:
        """Scan `markup` into a whole-document `Document`.

        Unlike `parse_html`, this doesn't check the markup first. It
        never fails.
        """
        return cls(cls.scanner_class().scan(markup), is_whole_document=True)

    @property
    def elements(self) -> Tuple[Element, ...]:
        """All the elements in this document, in source order."""
        return self._elements

    @property
    def is_whole_document(self) -> bool:
        """True if this is the unfiltered output of the scanner; False
        if it's the result of filtering.
        """
        return self._is_whole_document

    def filter(self, *selector: _SelectorComponent) -> Document:
        """Narrow this document down to the elements that match a
        selector.

        The selector can be given as up to three strings, or as a
        single tuple of up to three strings::

            document.filter("div")
            document.filter("div", "id")
            document.filter(("div", "id", "hello"))

        Any component can be ``""`` or ``"*"`` to leave it
        unconstrained, so ``document.filter("*", "*", "hello")`` finds
        any element with an attribute whose value is ``hello``.

        Filtering a whole document re-scans its markup; filtering the
        result of an earlier `filter` call narrows that result further.
        Either way the elements stay in source order.

        :return: A new `Document` with match scope. If the selector
            doesn't constrain anything, it's a copy of this one with the
            same scope.
        """
        normalized = Selector.normalize(*selector)
        if normalized.is_unconstrained:
            return type(self)(self._elements, self._is_whole_document)

        elements: Iterable[Element]
        if self._is_whole_document:
            elements = self.scanner_class().scan(self.decode())
        else:
            elements = self._elements

        for rule in normalized.rules:
            elements = [x for x in elements if rule.matches(x)]
        return type(self)(elements, is_whole_document=False)

    def _named_elements(self) -> Iterator[Element]:
        """Yield the elements that have a non-blank name."""
        for element in self._elements:
            if element.name.strip():
                yield element

    def _first_named_element(self) -> Optional[Element]:
        for element in self._named_elements():
            return element
        return None

    def _render(self, render: _ElementRenderFunction,
                separator: str = "") -> str:
        """Render this document one element at a time, honoring its
        scope.

        :param render: Turns one element into a string.
        :param separator: Joins the rendered elements of a match-scope
            document.
        """
        if self._is_whole_document:
            first = self._first_named_element()
            if first is None:
                return ""
            return render(first)
        return _join_unique(
            (render(x) for x in self._named_elements()), separator
        )

    def decode(self) -> str:
        """Render this document as markup."""
        return self._render(Element.decode)

    def decode_contents(self) -> str:
        """Render the inner markup of this document's elements."""
        return self._render(Element.decode_contents)

    def get_text(self, separator: str = "", strip: bool = False) -> str:
        """Get the visible text of this document's elements.

        :param separator: Text fragments, and the texts of separate
            elements, are joined using this separator.

        :param strip: If True, fragments are stripped before being
            joined, and whitespace-only fragments are left out.
        """
        return self._render(
            lambda element: element.get_text(separator, strip), separator
        )
    getText = get_text
    text = property(get_text)

    def get_attr_value(self, attr: str) -> str:
        """Get the value of an attribute from every element in this
        document.

        This looks at every element, even in a whole document. Repeated
        values are only included once.

        :param attr: The attribute name.
        """
        return _join_unique(x.get_attr_value(attr) for x in self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._elements)

    def __getitem__(self, index: Union[int, slice]
                    ) -> Union[Element, Tuple[Element, ...]]:
        return self._elements[index]

    def __str__(self) -> str:
        return self.decode()

    def __repr__(self) -> str:
        cls = type(self).__name__
        return f"<{cls} is_whole_document={self._is_whole_document} elements={list(self._elements)!r}>"

    def __eq__(self, other):
        return (
            isinstance(other, Document) and
            self._is_whole_document == other._is_whole_document and
            self._elements == other._elements
        )

    def __ne__(self, other):
        return not self == other


def _join_unique(strings: Iterable[str], separator: str = "") -> str:
    """Join strings, leaving out any that are empty or that exactly
    repeat an earlier one.
    """
    seen = set()
    unique: List[str] = []
    for string in strings:
        if not string or string in seen:
            continue
        seen.add(string)
        unique.append(string)
    return separator.join(unique)
