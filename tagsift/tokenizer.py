"""Split markup into a flat sequence of tokens.

The `Tokenizer` is the lexical layer shared by the `Scanner`, which
turns start and end tags into `Element` objects, and the
`TextExtractor`, which keeps only the visible character data. Both see
exactly the same tag boundaries, so an element's text never disagrees
with its inner markup.

Tokens don't carry copies of the markup; they carry offsets into it.
"""
from __future__ import annotations

from functools import lru_cache
import re
from typing import (
    Iterator,
    Optional,
    Pattern,
)

#: Elements that never have a closing tag or any contents. The first
#: group is the list from the HTML standard; the second group holds
#: obsolete elements that browsers still treat the same way.
VOID_ELEMENTS: frozenset = frozenset([
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr',

    'basefont', 'bgsound', 'frame', 'keygen', 'menuitem',
])

#: Elements whose contents are never scanned for markup. Everything up
#: to the matching closing tag is a single RAW_TEXT token, so that
#: ``if (a<b)`` inside a script doesn't open a tag.
RAW_TEXT_ELEMENTS: frozenset = frozenset(['script', 'style'])

# Token kinds.
TEXT = 'text'
START_TAG = 'start'
END_TAG = 'end'
RAW_TEXT = 'raw'
COMMENT = 'comment'
DECLARATION = 'declaration'

# An opening tag. Attribute values may be quoted, and a quoted value
# may contain a '>'. The alternatives inside the repeated group all
# start with different characters, so a failed match doesn't
# backtrack exponentially.
start_tag_re: Pattern[str] = re.compile(
    r"""<([a-zA-Z][^\s/>]*)((?:[^>"']|"[^"]*"|'[^']*')*)>"""
)

# Used when start_tag_re fails, usually because of an unbalanced
# quote: the tag simply runs to the next '>'.
loose_start_tag_re: Pattern[str] = re.compile(r"<([a-zA-Z][^\s/>]*)([^>]*)>")

end_tag_re: Pattern[str] = re.compile(r"</\s*([a-zA-Z][^\s/>]*)[^>]*>")


@lru_cache(maxsize=None)
def _raw_text_end_re(name: str) -> Pattern[str]:
    """The closing tag of the raw-text element `name`, in any case."""
    return re.compile(
        r"</(%s)(?=[\s/>])[^>]*>" % re.escape(name), re.IGNORECASE
    )


class Token(object):
    """A piece of markup, identified by its position in the source.

    :param kind: One of TEXT, START_TAG, END_TAG, RAW_TEXT, COMMENT
        or DECLARATION.
    :param start: Offset of the first character of the token.
    :param end: Offset just past the last character of the token.
    :param name: The lowercased tag name, for START_TAG and END_TAG
        tokens. For RAW_TEXT tokens, the name of the element that
        contains the text.
    :param self_closing: True for a START_TAG written as ``<name/>``.
    """

    def __init__(self, kind: str, start: int, end: int,
                 name: Optional[str] = None, self_closing: bool = False):
        self.kind = kind
        self.start = start
        self.end = end
        self.name = name
        self.self_closing = self_closing

    def __repr__(self) -> str:
        cls = type(self).__name__
        return f"<{cls} kind={self.kind} {self.start}..{self.end} name={self.name} self_closing={self.self_closing}>"

    def __eq__(self, other):
        return (
            isinstance(other, Token) and
            self.kind == other.kind and
            self.start == other.start and
            self.end == other.end and
            self.name == other.name and
            self.self_closing == other.self_closing
        )


class Tokenizer(object):
    """Iterate over the tokens of a markup string, in document order.

    This never fails: a '<' that doesn't begin a tag, a comment or a
    declaration is just part of the surrounding text.

    :param markup: The markup to tokenize.
    """

    #: Elements whose contents are treated as one RAW_TEXT token.
    raw_text_elements: frozenset = RAW_TEXT_ELEMENTS

    def __init__(self, markup: str):
        self.markup = markup

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def tokens(self) -> Iterator[Token]:
        """Yield every token in the markup."""
        markup = self.markup
        length = len(markup)
        pos = text_start = 0
        last_gt = markup.rfind('>')
        while True:
            lt = markup.find('<', pos)
            if lt == -1:
                break
            if lt > last_gt:
                # Every tag and declaration ends with a '>', so past the
                # last one only an unterminated comment or CDATA section
                # can start. Anything else is trailing text.
                lt = min(
                    (found for found in (markup.find('<!--', lt),
                                         markup.find('<![CDATA[', lt))
                     if found != -1),
                    default=-1
                )
                if lt == -1:
                    break
            token = self._markup_token(lt)
            if token is None:
                # Not a tag after all; keep looking.
                pos = lt + 1
                continue
            if lt > text_start:
                yield Token(TEXT, text_start, lt)
            yield token
            pos = text_start = token.end

            if (token.kind == START_TAG and not token.self_closing
                and token.name in self.raw_text_elements):
                close = self._raw_text_end(token.name, pos)
                end = length if close is None else close.start
                if end > pos:
                    yield Token(RAW_TEXT, pos, end, token.name)
                if close is not None:
                    yield close
                    end = close.end
                pos = text_start = end

        if text_start < length:
            yield Token(TEXT, text_start, length)

    def _markup_token(self, lt: int) -> Optional[Token]:
        """Identify the markup construct that starts at offset `lt`.

        :return: A Token, or None if the '<' at `lt` is plain text.
        """
        markup = self.markup
        if markup.startswith('<!--', lt):
            # An unterminated comment swallows the rest of the document.
            end = markup.find('-->', lt + 4)
            end = len(markup) if end == -1 else end + 3
            return Token(COMMENT, lt, end)

        if markup.startswith('<![CDATA[', lt):
            end = markup.find(']]>', lt + 9)
            end = len(markup) if end == -1 else end + 3
            return Token(DECLARATION, lt, end)

        if markup.startswith('<!', lt) or markup.startswith('<?', lt):
            end = markup.find('>', lt + 2)
            if end == -1:
                return None
            return Token(DECLARATION, lt, end + 1)

        if markup.startswith('</', lt):
            match = end_tag_re.match(markup, lt)
            if match is None:
                return None
            return Token(END_TAG, lt, match.end(), match.group(1).lower())

        match = (start_tag_re.match(markup, lt)
                 or loose_start_tag_re.match(markup, lt))
        if match is None:
            return None
        self_closing = match.group(2).rstrip().endswith('/')
        return Token(
            START_TAG, lt, match.end(), match.group(1).lower(), self_closing
        )

    def _raw_text_end(self, name: str, pos: int) -> Optional[Token]:
        """Find the closing tag that ends a raw-text element.

        :param name: The name of the raw-text element.
        :param pos: Where the element's contents begin.
        :return: An END_TAG token, or None if the element is never closed.
        """
        match = _raw_text_end_re(name).search(self.markup, pos)
        if match is None:
            return None
        return Token(END_TAG, match.start(), match.end(), name)
