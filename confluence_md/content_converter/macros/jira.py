"""Jira issue macros.

Single issues become links to the issue; JQL queries are dynamic and only
leave a notice behind.
"""

from confluence_md.content_converter.formatting import format_link
from confluence_md.content_converter.registry import macro_handlers
from confluence_md.models.conversion_options import ReferenceKind

SERVER_PARAMETERS = ("server", "baseurl", "base-url")


def render_issue(call, ctx, key: str) -> str:
    server = next((call.parameter(name).strip() for name in SERVER_PARAMETERS if call.parameter(name).strip()), "")
    if server:
        url = f"{server.rstrip('/')}/browse/{key}"
        text = format_link(key, ctx.resolve_link(url, ReferenceKind.URL))
    else:
        text = key

    summary = call.parameter("summary").strip()
    return f"{text}: {summary}" if summary else text


@macro_handlers.register("jira", "jiraissues")
def render_jira(call, ctx) -> str:
    key = call.parameter("key").strip()
    if key:
        return render_issue(call, ctx, key)

    query = call.parameter("jql").strip() or (call.plain_body or "").strip()
    if query:
        message = f"Jira issues macro (JQL: {query}). Dynamic content not exported."
    else:
        message = "Jira issues macro (dynamic content not exported)."

    if ctx.state.in_table_cell:
        return f"_{message}_\n"
    return f"\n> _{message}_\n\n"
