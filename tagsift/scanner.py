"""The extraction stage: turn markup into a flat list of elements."""
from __future__ import annotations

from typing import (
    List,
    Optional,
)

from tagsift.element import Element
from tagsift.tokenizer import (
    END_TAG,
    START_TAG,
    Token,
    Tokenizer,
    VOID_ELEMENTS,
)


class _OpenElement(object):
    """An element whose opening tag has been seen but whose closing
    tag hasn't.

    :param name: The lowercased tag name.
    :param opening_markup: The opening tag, verbatim.
    :param slot: The index in the output list reserved for the element.
    :param content_start: The offset where the element's contents begin.
    """

    def __init__(self, name: str, opening_markup: str, slot: int,
                 content_start: int):
        self.name = name
        self.opening_markup = opening_markup
        self.slot = slot
        self.content_start = content_start


class Scanner(object):
    """Finds every element in a markup document, at any depth.

    The result is flat: an element nested five levels deep shows up in
    the same list as the document's root element, in the order the
    opening tags appear in the source. Each element carries its inner
    markup, worked out by matching opening and closing tags with a
    stack:

    * A closing tag closes the most recently opened element with the
      same name. Elements opened after that one are still open inside
      it, so they're closed at the same point.

    * A closing tag with no open element of the same name is ignored.

    * Void elements (``<br>``) and self-closing tags (``<div/>``) are
      complete as soon as they're seen, with no inner markup.

    * Elements still open at the end of the document run to the end
      of the document.

    The contents of raw-text elements (``<script>`` and ``<style>``, see
    `Tokenizer.raw_text_elements`) aren't scanned, so a tag written
    inside a script never becomes an element.

    Comments, doctypes and other declarations never become elements.
    """

    #: Elements that never have contents, so their opening tag is the
    #: whole element.
    void_elements: frozenset = VOID_ELEMENTS

    tokenizer_class: type = Tokenizer

    def scan(self, markup: str) -> List[Element]:
        """Extract every element from `markup`.

        This never fails, whatever `markup` contains.

        :param markup: A string of HTML.
        :return: A list of `Element` objects in source order.
        """
        # Each element gets a slot in this list when its opening tag is
        # seen, and the slot is filled in once the closing tag is
        # found. That keeps the output in source order even though
        # nested elements are closed before their ancestors.
        elements: List[Optional[Element]] = []
        stack: List[_OpenElement] = []

        for token in self.tokenizer_class(markup):
            if token.kind == START_TAG:
                opening_markup = markup[token.start:token.end]
                if token.self_closing or token.name in self.void_elements:
                    elements.append(Element(token.name, opening_markup))
                else:
                    stack.append(
                        _OpenElement(
                            token.name, opening_markup, len(elements),
                            token.end
                        )
                    )
                    elements.append(None)
            elif token.kind == END_TAG:
                self._close(markup, token, stack, elements)

        # Anything left open runs to the end of the document.
        for open_element in stack:
            elements[open_element.slot] = Element(
                open_element.name, open_element.opening_markup,
                markup[open_element.content_start:]
            )
        return [element for element in elements if element is not None]

    def _close(self, markup: str, token: Token, stack: List[_OpenElement],
               elements: List[Optional[Element]]) -> None:
        """Handle a closing tag.

        :param markup: The markup being scanned.
        :param token: The END_TAG token.
        :param stack: Elements that are currently open, innermost last.
        :param elements: The output list.
        """
        for index in range(len(stack) - 1, -1, -1):
            if stack[index].name == token.name:
                break
        else:
            # Nothing to close.
            return

        inner_end = token.start
        for open_element in stack[index:]:
            elements[open_element.slot] = Element(
                open_element.name, open_element.opening_markup,
                markup[open_element.content_start:inner_end]
            )
        del stack[index:]
