"""Helper classes for tests."""
from typing import (
    Iterable,
    List,
)

from tagsift import parse_html
from tagsift.document import Document

# A small but realistic page, with a doctype, a stylesheet, void
# elements, nested headings, paragraphs and links.
EXAMPLE_DOMAIN = """
    <!doctype html>
    <html>
    <head>
        <title>Example Domain</title>

        <meta charset="utf-8" />
        <meta http-equiv="Content-type" content="text/html; charset=utf-8" />
        <meta name="viewport" content="width=device-width, initial-scale=1" />
        <style type="text/css">
        body {
            background-color: #f0f0f2;
            margin: 0;
        }
        div > p {
            width: 600px;
        }
        </style>
    </head>

    <body>
    <div>
        <h1>Example Domain</h1>
        <p>This domain is for use in illustrative examples in documents.</p>
        <p><a href="https://www.iana.org/domains/example">More information...</a></p>
    </div>
    </body>
    </html>
    """

HELLO_WORLD = "<html><body><div id='hello'>Hello World!</div></body></html>"


class SiftTest(object):

    def document(self, markup: str) -> Document:
        """Parse some markup into a whole-document `Document`."""
        return parse_html(markup)

    def names(self, elements: Iterable) -> List[str]:
        """The tag names of some elements, in order."""
        return [x.name for x in elements]

    def assert_names(self, elements: Iterable, names: Iterable[str]) -> None:
        """Verify that some elements have the given tag names, in the
        given order.
        """
        assert self.names(elements) == list(names)
