"""tagsift pulls elements out of HTML and lets you narrow them down by
tag name, attribute name and attribute value.

    >>> from tagsift import parse_html
    >>> document = parse_html("<html><body><div id='hello'>Hello World!</div></body></html>")
    >>> document.filter("div").decode_contents()
    'Hello World!'
    >>> document.filter("div", "id").get_attr_value("id")
    'hello'
    >>> document.filter("body").get_text()
    'Hello World!'

There's no tree here. `parse_html` finds every element in the
markup, at any depth, and gives you a flat `Document` you can filter
and render.
"""
from __future__ import annotations
# Use of this source code is governed by the MIT license.
__license__ = "MIT"

__version__ = "0.1.0"

__all__ = [
    "Document",
    "Element",
    "InvalidInput",
    "Selector",
    "SelectorResemblesMarkupWarning",
    "UnusualUsageWarning",
    "XMLParsedAsHTMLWarning",
    "parse_html",
]

import re
from typing import Pattern
import warnings

from tagsift._typing import (
    _IncomingMarkup,
    _RawMarkup,
)
from tagsift._warnings import (
    SelectorResemblesMarkupWarning,
    UnusualUsageWarning,
    XMLParsedAsHTMLWarning,
)
from tagsift.document import Document
from tagsift.element import Element
from tagsift.selector import Selector


class InvalidInput(ValueError):
    """An exception raised when `parse_html` is given text that can't
    possibly contain a tag.
    """


# Markup that starts with an XML declaration.
xml_declaration_re: Pattern[str] = re.compile(r"^\s*<\?xml\b", re.IGNORECASE)

# A sign that an XML document is actually XHTML.
xhtml_re: Pattern[str] = re.compile(r"<html\b", re.IGNORECASE)

# Text that's probably the address of a document rather than the
# document itself.
url_re: Pattern[str] = re.compile(r"^(https?|ftp|file)://\S+$", re.IGNORECASE)


def parse_html(markup: _IncomingMarkup) -> Document:
    """Find every element in a string of HTML.

    :param markup: A string, a UTF-8 bytestring, or an open filehandle
        from which either of those can be read.

    :return: A `Document` with whole-document scope.

    :raise InvalidInput: If the markup doesn't contain both a '<' and
        a '>', or is a bytestring that isn't UTF-8.
    :raise TypeError: If the markup isn't any of the supported types.
    """
    if hasattr(markup, 'read'):
        markup = markup.read()
    markup = _to_unicode(markup)

    if '<' not in markup or '>' not in markup:
        if url_re.match(markup.strip()):
            raise InvalidInput(
                f"The input looks like a URL, not markup: {markup.strip()}. Fetch the document first and pass its contents to parse_html."
            )
        raise InvalidInput(
            "An error has occurred when trying to parse the markup: it contains no tags."
        )

    if xml_declaration_re.match(markup) and not xhtml_re.search(markup):
        warnings.warn(
            XMLParsedAsHTMLWarning.MESSAGE, XMLParsedAsHTMLWarning,
            stacklevel=2
        )
    return Document.from_markup(markup)


def _to_unicode(markup: _RawMarkup) -> str:
    """Make sure the markup is a Unicode string."""
    if isinstance(markup, str):
        return markup
    if isinstance(markup, bytes):
        try:
            return markup.decode("utf8")
        except UnicodeDecodeError as e:
            raise InvalidInput(
                "The markup is a bytestring, but it isn't valid UTF-8. Decode it yourself and pass in a string."
            ) from e
    raise TypeError(
        f"Markup must be a string, a bytestring or a filehandle, not {type(markup).__name__}."
    )
