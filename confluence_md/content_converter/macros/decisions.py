"""Decision macros, decision lists and decision reports.

A decision renders as a bold label with its title, a parenthesised
summary of the metadata that is set, and its body. Decision lists render
each decision as a list item, whether they come from decision macros or
from an ADF decision-list node. Decision reports are dynamic and only
leave a notice behind.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from bs4 import Tag

from confluence_md.content_converter.formatting import format_list_item
from confluence_md.content_converter.links import USER_ID_ATTRIBUTES
from confluence_md.content_converter.macros.base import MACRO_CONTAINER_TAGS, MacroCall
from confluence_md.content_converter.nodes import (
    attribute,
    child_elements,
    element_text,
    find_child,
    qualified_name,
)
from confluence_md.content_converter.registry import macro_handlers

DEFAULT_TITLE = "Untitled decision"
DECISION_ITEM_TYPE = "decision-item"

# Field name -> parameter names, first non-empty wins
MACRO_PARAMETERS: Dict[str, Tuple[str, ...]] = {
    "title": ("title",),
    "status": ("status",),
    "owner": ("owner",),
    "date": ("date",),
    "due_date": ("due-date", "duedate"),
    "outcome": ("outcome",),
}
ADF_ATTRIBUTES: Dict[str, Tuple[str, ...]] = {
    "title": ("title", "text", "value"),
    "status": ("state", "status"),
    "owner": ("owner", "assignee"),
    "date": ("date",),
    "due_date": ("due-date", "duedate"),
    "outcome": ("outcome", "result"),
}


@dataclass
class Decision:
    """A single decision and its metadata."""

    title: str = ""
    status: str = ""
    owner: str = ""
    date: str = ""
    due_date: str = ""
    outcome: str = ""
    body: str = ""

    def metadata(self) -> str:
        fields = (
            ("Status", self.status),
            ("Owner", self.owner),
            ("Date", self.date),
            ("Due date", self.due_date),
            ("Outcome", self.outcome),
        )
        return "; ".join(f"{label}: {value}" for label, value in fields if value)

    def render(self) -> str:
        """Render the summary line, followed by the body after a blank line.

        Example:
            >>> Decision(title="Use Postgres", status="Decided").render()
            '**Decision:** Use Postgres (Status: Decided)'
        """
        summary = f"**Decision:** {self.title or DEFAULT_TITLE}"
        metadata = self.metadata()
        if metadata:
            summary = f"{summary} ({metadata})"
        return f"{summary}\n\n{self.body}" if self.body else summary


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _parameter_value(element: Tag, name: str) -> str:
    """Return a parameter's text, or the user or page it refers to."""
    for parameter in child_elements(element, "ac:parameter"):
        if attribute(parameter, "ac:name").strip().lower() != name:
            continue
        text = _collapse(element_text(parameter))
        if text:
            return text
        user = find_child(parameter, "ri:user")
        if user is not None:
            account = next((attribute(user, key) for key in USER_ID_ATTRIBUTES if attribute(user, key)), "")
            return f"@user:{account}" if account else ""
        page = find_child(parameter, "ri:page")
        if page is not None:
            title = attribute(page, "ri:content-title").strip()
            return f"[[{title}]]" if title else ""
    return ""


def _first_value(lookup, names: Tuple[str, ...]) -> str:
    return next((value for value in map(lookup, names) if value), "")


def decision_from_macro(call: MacroCall, ctx) -> Decision:
    values = {
        field: _first_value(lambda name: _parameter_value(call.element, name), names)
        for field, names in MACRO_PARAMETERS.items()
    }
    return Decision(body=call.render_body(ctx).strip(), **values)


def decision_from_adf_item(item: Tag, ctx) -> Decision:
    """Build a decision from an ADF decision-item node.

    Without a title attribute the first paragraph of the content is the title.
    """
    attributes = {
        attribute(node, "key").strip().lower(): _collapse(element_text(node))
        for node in child_elements(item, "ac:adf-attribute")
    }
    values = {
        field: _first_value(lambda name: attributes.get(name, ""), names)
        for field, names in ADF_ATTRIBUTES.items()
    }

    content = find_child(item, "ac:adf-content")
    body = ctx.convert_children(content).strip() if content is not None else ""
    if not values["title"] and body:
        first, _, rest = body.partition("\n\n")
        values["title"] = _collapse(first)
        body = rest.strip()
    return Decision(body=body, **values)


def render_decision_list(decisions: List[Decision], ctx) -> str:
    items = "".join(format_list_item(decision.render(), "- ") for decision in decisions)
    if not items or ctx.state.in_table_cell:
        return items
    return f"\n{items}\n"


def render_adf_decision_list(node: Tag, ctx) -> str:
    """Render the decision items of an ADF decision-list node.

    Items with neither a title nor content are skipped. Returns an empty
    string when no item is left.
    """
    decisions = []
    for item in child_elements(node, "ac:adf-node"):
        if attribute(item, "type").strip().lower() != DECISION_ITEM_TYPE:
            continue
        decision = decision_from_adf_item(item, ctx)
        if decision.title or decision.body:
            decisions.append(decision)
    return render_decision_list(decisions, ctx)


def _is_decision_macro(tag: Tag) -> bool:
    return (
        qualified_name(tag) in MACRO_CONTAINER_TAGS
        and attribute(tag, "ac:name").strip().lower() == "decision"
    )


def _nested_in_decision(tag: Tag, body: Tag) -> bool:
    """Return True when a decision sits in the body of another decision."""
    for parent in tag.parents:
        if parent is body:
            return False
        if _is_decision_macro(parent):
            return True
    return False


@macro_handlers.register("decision")
def render_decision(call, ctx) -> str:
    rendered = decision_from_macro(call, ctx).render()
    if ctx.state.in_table_cell:
        return f"{rendered}\n"
    return f"\n{rendered}\n\n"


@macro_handlers.register("decision-list")
def render_decision_list_macro(call, ctx) -> str:
    if call.body is None:
        return call.render_body(ctx)

    elements = [
        tag for tag in call.body.find_all(True)
        if _is_decision_macro(tag) and not _nested_in_decision(tag, call.body)
    ]
    if not elements:
        return call.render_body(ctx)
    decisions = [decision_from_macro(MacroCall.from_element(tag), ctx) for tag in elements]
    return render_decision_list(decisions, ctx)


@macro_handlers.register("decisionreport")
def render_decision_report(call, ctx) -> str:
    query = call.parameter("cql").strip()
    if query:
        message = f"Decision report macro (CQL: {query}). Dynamic content not exported."
    else:
        message = "Decision report macro (dynamic content not exported)."

    if ctx.state.in_table_cell:
        return f"_{message}_\n"
    return f"\n> _{message}_\n\n"
