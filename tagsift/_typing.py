# Custom type aliases used throughout tagsift to improve readability.

from typing_extensions import (
    TypeAlias,
)
from typing import (
    Callable,
    IO,
    Optional,
    TYPE_CHECKING,
    Union,
)

if TYPE_CHECKING:
    from tagsift.element import Element

# Aliases for markup in various stages of processing.
#
# The rawest form of markup: either a string or an open filehandle.
_IncomingMarkup: TypeAlias = Union[str, bytes, IO[str], IO[bytes]]

# Markup that is in memory but has (potentially) yet to be converted
# to Unicode.
_RawMarkup: TypeAlias = Union[str, bytes]

# Aliases for the pieces of a selector.
#
# A single component of a selector as the caller passes it in. None,
# the empty string and "*" all mean "don't constrain this dimension".
# Anything that isn't a string or bytestring is converted with str().
_SelectorComponent: TypeAlias = Optional[Union[str, bytes, object]]

# A function that turns an Element into some kind of string: its
# markup, its inner markup, its text.
_ElementRenderFunction: TypeAlias = Callable[['Element'], str]
