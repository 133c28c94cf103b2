"""The macro call passed to every macro renderer."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from bs4 import Tag

from confluence_md.content_converter.nodes import (
    attribute,
    child_elements,
    element_text,
    find_child,
    parameters,
    qualified_name,
)

MACRO_CONTAINER_TAGS = frozenset({"ac:structured-macro", "ac:macro"})
_NON_BODY_TAGS = ("ac:parameter", "ac:rich-text-body", "ac:plain-text-body")


@dataclass
class MacroCall:
    """A structured macro with its parameters and body.

    Attributes:
        name: Value of ac:name
        element: The macro container element
        parameters: Parameter values keyed by name; an unnamed parameter uses ""
        body: The ac:rich-text-body element, if any
        plain_body: Text of the ac:plain-text-body element, if any
    """

    name: str
    element: Tag
    parameters: Dict[str, str] = field(default_factory=dict)
    body: Optional[Tag] = None
    plain_body: Optional[str] = None

    @classmethod
    def from_element(cls, element: Tag) -> "MacroCall":
        plain_body = find_child(element, "ac:plain-text-body")
        return cls(
            name=attribute(element, "ac:name").strip().lower(),
            element=element,
            parameters=parameters(element),
            body=find_child(element, "ac:rich-text-body"),
            plain_body=element_text(plain_body) if plain_body is not None else None,
        )

    def parameter(self, name: str, default: str = "") -> str:
        return self.parameters.get(name, default)

    @property
    def title(self) -> str:
        return self.parameter("title").strip()

    def render_body(self, ctx) -> str:
        """Render the body, preferring the rich body over the plain one.

        Macros without either body render their remaining children.
        """
        if self.body is not None:
            return ctx.convert_children(self.body)
        if self.plain_body is not None:
            return self.plain_body
        return "".join(
            ctx.convert(child)
            for child in self.element.children
            if not (isinstance(child, Tag) and qualified_name(child) in _NON_BODY_TAGS)
        )

    def body_text(self) -> str:
        """Return the body as raw text, without rendering any markup."""
        if self.plain_body is not None:
            return self.plain_body
        if self.body is not None:
            return element_text(self.body)
        return "".join(
            element_text(child) for child in child_elements(self.element)
            if qualified_name(child) not in _NON_BODY_TAGS
        )
