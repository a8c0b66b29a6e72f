"""Define some custom warnings."""


class UnusualUsageWarning(UserWarning):
    """A superclass for warnings issued when tagsift sees something
    that is typically the result of a mistake in the calling code, but
    might be intentional on the part of the user. If it is in fact
    intentional, you can filter the individual warning class to get rid
    of the warning. If you don't want these hints at all, filter the
    UnusualUsageWarning class itself.
    """


class SelectorResemblesMarkupWarning(UnusualUsageWarning):
    """The warning issued when the tag name in a selector looks like a
    piece of markup (``"<div>"``) or like a CSS selector (``"div p"``)
    instead of a plain tag name.
    """


class XMLParsedAsHTMLWarning(UnusualUsageWarning):
    """The warning issued when `parse_html` is given a document that
    starts with an XML declaration and doesn't look like XHTML.
    """
    MESSAGE: str = """It looks like you're parsing an XML document with an HTML scanner. If this really is an HTML document (maybe it's XHTML?), you can ignore or filter this warning. If it's XML, be aware that tag names will be lowercased and HTML's void elements (such as <link> and <meta>) will never be given any contents."""  #: :meta private:
