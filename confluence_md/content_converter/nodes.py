"""Helpers for reading the parsed storage tree."""

from typing import Dict, Iterator, Optional

from bs4 import NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)

INLINE_PARENT_TAGS = frozenset({
    "a", "b", "code", "del", "em", "i", "li", "p", "s", "span", "strike",
    "strong", "sub", "sup", "td", "th", "u",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ac:link-body", "ac:task-body", "ac:plain-text-link-body",
})


def qualified_name(tag: Tag) -> str:
    """Return the tag name including its namespace prefix, e.g. 'ac:link'."""
    name = tag.name or ""
    if tag.prefix and ":" not in name:
        return f"{tag.prefix}:{name}"
    return name


def is_text(node) -> bool:
    """Return True for character data (including CDATA), False for comments and the like."""
    return isinstance(node, NavigableString) and not isinstance(node, _NON_TEXT_STRINGS)


def child_elements(tag: Tag, name: Optional[str] = None) -> Iterator[Tag]:
    """Yield element children, optionally only those with the given qualified name."""
    for child in tag.children:
        if isinstance(child, Tag) and (name is None or qualified_name(child) == name):
            yield child


def find_child(tag: Tag, name: str) -> Optional[Tag]:
    return next(child_elements(tag, name), None)


def element_text(tag: Optional[Tag]) -> str:
    """Concatenate all character data below tag."""
    if tag is None:
        return ""
    return "".join(str(node) for node in tag.descendants if is_text(node))


def attribute(tag: Tag, name: str, default: str = "") -> str:
    value = tag.get(name)
    if value is None:
        return default
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def parameters(tag: Tag) -> Dict[str, str]:
    """Collect ac:parameter children by name; the first occurrence wins."""
    values: Dict[str, str] = {}
    for parameter in child_elements(tag, "ac:parameter"):
        name = attribute(parameter, "ac:name").strip()
        if name not in values:
            values[name] = element_text(parameter).strip()
    return values


def in_inline_context(tag: Tag) -> bool:
    parent = tag.parent
    return isinstance(parent, Tag) and qualified_name(parent) in INLINE_PARENT_TAGS
