from __future__ import annotations
# Use of this source code is governed by the MIT license.
__license__ = "MIT"

from tagsift.text import get_text as _get_text


class Element(object):
    """One opening tag found in a markup document, along with the
    markup it encloses.

    When tagsift scans the markup ``<b class="x">penguin</b>``, it
    creates an `Element` whose `name` is ``"b"``, whose
    `opening_markup` is ``'<b class="x">'`` and whose `inner_markup`
    is ``"penguin"``.

    Elements are immutable. You'll normally get them from a
    `Document` rather than creating them yourself.

    :param name: The tag name. It will be lowercased.
    :param opening_markup: The opening tag exactly as it appeared in
        the source, attributes and all.
    :param inner_markup: Everything between the end of the opening
        tag and the start of the matching closing tag.
    """

    def __init__(self, name: str, opening_markup: str, inner_markup: str = ""):
        self._name = name.lower()
        self._opening_markup = opening_markup
        self._inner_markup = inner_markup

    @property
    def name(self) -> str:
        """The lowercased tag name."""
        return self._name

    @property
    def opening_markup(self) -> str:
        """The opening tag, verbatim."""
        return self._opening_markup

    @property
    def inner_markup(self) -> str:
        """The markup between the opening tag and its closing tag.

        This is empty for void elements like ``<br>`` and for
        self-closing tags like ``<div/>``.
        """
        return self._inner_markup

    def decode(self) -> str:
        """Render this element and its contents as markup.

        A closing tag is always generated, even if the source used a
        self-closing tag or never closed the element at all.
        """
        return f"{self._opening_markup}{self._inner_markup}</{self._name}>"

    def decode_contents(self) -> str:
        """Render this element's contents (but not the element itself)
        as markup.
        """
        return self._inner_markup

    def get_text(self, separator: str = "", strip: bool = False) -> str:
        """Get the visible text inside this element.

        Markup is removed, and so is anything inside ``<script>`` or
        ``<style>`` tags.

        :param separator: Text fragments will be joined using this
            separator.

        :param strip: If True, fragments will be stripped before being
            joined, and fragments that are only whitespace are left out.
        """
        return _get_text(self._name, self._inner_markup, separator, strip)
    getText = get_text
    text = property(get_text)

    def get_attr_value(self, attr: str) -> str:
        """Find the value of an attribute in the opening tag.

        Only the first ``attr=`` in the opening tag is considered. A
        value in double or single quotes runs to the matching quote.
        An unquoted value runs to the next space, or, if there isn't
        one, to the end of the tag without its final character (which
        is the closing '>').

        :param attr: The attribute name.
        :return: The attribute value, or the empty string if the
            attribute isn't present.
        """
        key = f"{attr}="
        opening = self._opening_markup
        index = opening.find(key)
        if index == -1:
            return ""
        value = opening[index + len(key):]
        if not value:
            return ""
        quote = value[0]
        if quote in ('"', "'"):
            value = value[1:]
            end = value.find(quote)
            if end == -1:
                # No closing quote: treat it like an unquoted value at
                # the end of the tag.
                return value[:-1]
            return value[:end]
        end = value.find(" ")
        if end == -1:
            return value[:-1]
        return value[:end]
    get = get_attr_value

    def __str__(self) -> str:
        return self.decode()

    def __repr__(self) -> str:
        cls = type(self).__name__
        return f"<{cls} name={self._name!r} opening_markup={self._opening_markup!r} inner_markup={self._inner_markup!r}>"

    def __eq__(self, other):
        return (
            isinstance(other, Element) and
            self._name == other._name and
            self._opening_markup == other._opening_markup and
            self._inner_markup == other._inner_markup
        )

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self._name, self._opening_markup, self._inner_markup))
