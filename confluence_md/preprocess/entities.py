"""Named entity normalization.

Storage payloads use HTML named entities (&nbsp;, &rarr;, ...) that a
strict XML parser rejects. They are rewritten to numeric character
references before parsing; the five XML predefined entities are kept.
CDATA sections and comments are copied unchanged.
"""

import re
from html.entities import html5
from types import MappingProxyType

XML_PREDEFINED_ENTITIES = frozenset({"amp", "lt", "gt", "quot", "apos"})

NAMED_ENTITY_REFERENCES = MappingProxyType({
    name[:-1]: "".join(f"&#{ord(char)};" for char in value)
    for name, value in html5.items()
    if name.endswith(";")
})

_ENTITY_RE = re.compile(
    r"<!\[CDATA\[.*?\]\]>"
    r"|<!--.*?-->"
    r"|&([A-Za-z][A-Za-z0-9]*);",
    re.DOTALL,
)


def normalize_entities(text: str) -> str:
    """Replace HTML named entities with numeric character references.

    Unknown entity names are left untouched so that the parser reports them.
    Text inside CDATA sections and comments is never rewritten.

    Args:
        text: Raw storage payload

    Returns:
        Payload containing only XML-compatible entity references

    Example:
        >>> normalize_entities("a&nbsp;b &amp; c")
        'a&#160;b &amp; c'
    """
    def replace(match):
        name = match.group(1)
        if name is None or name in XML_PREDEFINED_ENTITIES:
            return match.group(0)
        return NAMED_ENTITY_REFERENCES.get(name, match.group(0))

    return _ENTITY_RE.sub(replace, text)
