# alertbridge/services/sanitize.py
"""
Input sanitizers for notification fields and saved options.

- sanitize_text_field(value): plain text, no markup, single line
- kses_post(value): the "safe post content" subset of HTML
- absint(value): non-negative integer
"""

import html
import re

import nh3

_WHITESPACE = re.compile(r"[\r\n\t ]+")
_OCTET = re.compile(r"%[a-f0-9]{2}", re.IGNORECASE)
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Tags and attributes allowed in post bodies
POST_TAGS = {
    "a", "abbr", "address", "article", "aside", "b", "blockquote", "br",
    "caption", "cite", "code", "dd", "del", "details", "div", "dl", "dt",
    "em", "figcaption", "figure", "footer", "h1", "h2", "h3", "h4", "h5",
    "h6", "header", "hr", "i", "img", "ins", "kbd", "li", "mark", "ol", "p",
    "pre", "q", "s", "section", "small", "span", "strike", "strong", "sub",
    "summary", "sup", "table", "tbody", "td", "tfoot", "th", "thead", "tr",
    "u", "ul",
}

POST_ATTRIBUTES = {
    "*": {"class", "id", "title", "lang", "dir", "style"},
    "a": {"href", "target", "name"},
    "img": {"src", "alt", "width", "height", "loading"},
    "blockquote": {"cite"},
    "q": {"cite"},
    "del": {"datetime"},
    "ins": {"datetime"},
    "ol": {"start", "reversed", "type"},
    "li": {"value"},
    "td": {"colspan", "rowspan", "headers"},
    "th": {"colspan", "rowspan", "headers", "scope"},
}

POST_URL_SCHEMES = {"http", "https", "mailto", "tel"}


def _to_text(value) -> str:
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    return value if isinstance(value, str) else str(value)


def sanitize_text_field(value) -> str:
    """
    Reduce a value to safe single-line plain text.

    Markup is removed (script and style bodies included), whitespace runs
    collapse to one space, and percent-encoded octets are dropped.
    """
    text = _to_text(value)
    if "<" in text:
        # nh3 escapes the text it keeps; only a stray "<" stays escaped
        text = html.unescape(nh3.clean(text, tags=set())).replace("<", "&lt;")
    text = _WHITESPACE.sub(" ", text).strip()

    found = False
    match = _OCTET.search(text)
    while match:
        text = text.replace(match.group(0), "")
        found = True
        match = _OCTET.search(text)
    if found:
        text = re.sub(r" +", " ", text).strip()
    return text


def kses_post(value) -> str:
    """Keep the markup allowed in post content, strip everything else."""
    html = _to_text(value)
    if not html:
        return ""
    return nh3.clean(
        html,
        tags=POST_TAGS,
        attributes=POST_ATTRIBUTES,
        url_schemes=POST_URL_SCHEMES,
    )


def absint(value) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return abs(value)
    if isinstance(value, float):
        return abs(int(value))
    match = _LEADING_INT.match(_to_text(value))
    return abs(int(match.group(1))) if match else 0
