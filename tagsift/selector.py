from __future__ import annotations
import re
from typing import (
    List,
    Pattern,
    Tuple,
)
import warnings

from tagsift._typing import _SelectorComponent
from tagsift._warnings import SelectorResemblesMarkupWarning
from tagsift.element import Element

#: A selector component with this value doesn't constrain anything.
#: Neither does the empty string.
WILDCARD = "*"

# A tag name with whitespace in it or a '<' in front is almost
# certainly a mistake.
markup_like_name_re: Pattern[str] = re.compile(r"^<|\s")


class MatchRule(object):
    """Decides whether an `Element` makes it through one narrowing pass
    of `Document.filter`.

    :param value: The tag name, attribute name or attribute value to
        look for.
    """
    value: str

    def __init__(self, value: str):
        self.value = value

    def matches(self, element: Element) -> bool:
        raise NotImplementedError()

    def __repr__(self) -> str:
        cls = type(self).__name__
        return f"<{cls} value={self.value!r}>"

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value


class TagNameMatchRule(MatchRule):
    """Matches elements with a particular tag name. The comparison
    ignores case.
    """

    def __init__(self, value: str):
        super(TagNameMatchRule, self).__init__(value.lower())

    def matches(self, element: Element) -> bool:
        return element.name == self.value


class AttributeNameMatchRule(MatchRule):
    """Matches elements whose opening tag contains ``name=``, whether
    the value that follows is quoted or not.
    """

    def matches(self, element: Element) -> bool:
        return f"{self.value}=" in element.opening_markup


class AttributeValueMatchRule(MatchRule):
    """Matches elements whose opening tag gives some attribute a
    particular value.

    The value may be in double quotes, in single quotes, or unquoted
    and followed by a space or the end of the tag.
    """

    def __init__(self, value: str):
        super(AttributeValueMatchRule, self).__init__(value)
        self.forms = (
            f'="{value}"',
            f"='{value}'",
            f"={value}>",
            f"={value} ",
        )

    def matches(self, element: Element) -> bool:
        opening_markup = element.opening_markup
        for form in self.forms:
            if form in opening_markup:
                return True
        return False


class Selector(object):
    """A (tag name, attribute name, attribute value) triple used to
    narrow down a `Document`.

    Any component can be left unconstrained by making it the empty
    string or ``"*"``. You'll usually let `Document.filter` build one
    of these for you out of whatever you passed in.

    :param name: Restricts the tag name.
    :param attr: Requires that the opening tag have this attribute.
    :param value: Requires that some attribute in the opening tag have
        this value.
    """
    name: str
    attr: str
    value: str

    def __init__(self, name: str = "", attr: str = "", value: str = ""):
        self.name = name
        self.attr = attr
        self.value = value

    @classmethod
    def normalize(cls, *components: _SelectorComponent) -> Selector:
        """Convert whatever was passed into `Document.filter` into a
        `Selector`.

        This accepts up to three positional components (tag name,
        attribute name, attribute value), or a single tuple, list or
        `Selector` holding them. Missing trailing components are
        unconstrained.

        :raise ValueError: If there are more than three components.
        :raise TypeError: If a component is itself a tuple or list.
        """
        if len(components) == 1:
            [single] = components
            if isinstance(single, Selector):
                return cls(single.name, single.attr, single.value)
            if isinstance(single, (tuple, list)):
                components = tuple(single)

        if len(components) > 3:
            raise ValueError(
                "A selector has at most three components: a tag name, an attribute name and an attribute value."
            )

        normalized: List[str] = []
        for component in components:
            normalized.append(cls._normalize_component(component))
        while len(normalized) < 3:
            normalized.append("")
        name, attr, value = normalized

        if markup_like_name_re.search(name):
            warnings.warn(
                f"The tag name {name!r} looks like markup or a CSS selector. Selectors match plain tag names such as 'div'.",
                SelectorResemblesMarkupWarning,
                stacklevel=3
            )
        return cls(name, attr, value)

    @classmethod
    def _normalize_component(cls, component: _SelectorComponent) -> str:
        """Turn one selector component into a string."""
        if component is None:
            return ""
        if isinstance(component, bytes):
            try:
                return component.decode("utf8")
            except UnicodeDecodeError as e:
                raise ValueError(
                    f"Selector component {component!r} is a bytestring, but it isn't valid UTF-8. Decode it yourself and pass in a string."
                ) from e
        if isinstance(component, str):
            return component
        if isinstance(component, (tuple, list)):
            raise TypeError(
                f"Selector components must be strings, not {type(component).__name__}: {component!r}"
            )
        return str(component)

    @staticmethod
    def is_constrained(component: str) -> bool:
        """Does this component actually restrict anything?"""
        return component not in ("", WILDCARD)

    @property
    def is_unconstrained(self) -> bool:
        """True if this selector would let every element through."""
        return not any(self.is_constrained(x) for x in self)

    @property
    def rules(self) -> List[MatchRule]:
        """The narrowing passes this selector calls for, in the order
        they must run: tag name, then attribute name, then attribute
        value. Unconstrained components contribute no rule.
        """
        rules: List[MatchRule] = []
        if self.is_constrained(self.name):
            rules.append(TagNameMatchRule(self.name))
        if self.is_constrained(self.attr):
            rules.append(AttributeNameMatchRule(self.attr))
        if self.is_constrained(self.value):
            rules.append(AttributeValueMatchRule(self.value))
        return rules

    def as_tuple(self) -> Tuple[str, str, str]:
        return (self.name, self.attr, self.value)

    def __iter__(self):
        return iter(self.as_tuple())

    def __repr__(self) -> str:
        cls = type(self).__name__
        return f"<{cls} name={self.name!r} attr={self.attr!r} value={self.value!r}>"

    def __eq__(self, other):
        return isinstance(other, Selector) and self.as_tuple() == other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())
