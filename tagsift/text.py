"""Turn an element's inner markup into the text a reader would see."""
from __future__ import annotations

from typing import Iterator

from tagsift.tokenizer import (
    END_TAG,
    RAW_TEXT,
    START_TAG,
    TEXT,
    Tokenizer,
    VOID_ELEMENTS,
)

#: Elements whose contents never show up as text on the page.
INVISIBLE_ELEMENTS: frozenset = frozenset(['script', 'style'])


class TextExtractor(object):
    """Strips the markup out of an element's contents.

    Character data is kept in document order. Tags, comments and
    declarations are dropped, and so is everything inside an
    invisible element such as ``<script>``, however deeply it's
    nested.

    :param separator: Text fragments will be joined with this string.
    :param strip: If True, each fragment is stripped of surrounding
        whitespace, and fragments that end up empty are dropped.
    """

    #: The contents of these elements are never considered text.
    invisible_elements: frozenset = INVISIBLE_ELEMENTS

    #: These elements can't contain anything, so they can't hide text
    #: even if they're listed in `invisible_elements`.
    void_elements: frozenset = VOID_ELEMENTS

    tokenizer_class: type = Tokenizer

    def __init__(self, separator: str = "", strip: bool = False):
        self.separator = separator
        self.strip = strip

    def strings(self, name: str, inner_markup: str) -> Iterator[str]:
        """Yield the visible text fragments inside an element.

        :param name: The name of the element. If it's invisible,
            nothing is yielded.
        :param inner_markup: The element's inner markup.
        """
        if name in self.invisible_elements:
            return

        # How many invisible elements are currently open.
        hidden = 0
        for token in self.tokenizer_class(inner_markup):
            if token.kind == START_TAG:
                if (token.name in self.invisible_elements
                    and not token.self_closing
                    and token.name not in self.void_elements):
                    hidden += 1
            elif token.kind == END_TAG:
                if token.name in self.invisible_elements and hidden:
                    hidden -= 1
            elif token.kind in (TEXT, RAW_TEXT) and not hidden:
                fragment = inner_markup[token.start:token.end]
                if self.strip:
                    fragment = fragment.strip()
                if fragment:
                    yield fragment

    def get_text(self, name: str, inner_markup: str) -> str:
        """Get all the visible text inside an element as one string."""
        return self.separator.join(self.strings(name, inner_markup))


def get_text(name: str, inner_markup: str, separator: str = "",
             strip: bool = False) -> str:
    """Get the visible text of the element called `name` whose inner
    markup is `inner_markup`.

    With the default arguments, this is the plain concatenation of all
    visible character data.
    """
    return TextExtractor(separator, strip).get_text(name, inner_markup)
