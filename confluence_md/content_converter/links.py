"""Handlers for links and images.

Every link target is passed through the configured link rewrite policy.
Images and attachments are also recorded as assets of the document.
"""

import logging

from confluence_md.content_converter.formatting import format_link
from confluence_md.content_converter.nodes import (
    attribute,
    element_text,
    find_child,
    in_inline_context,
)
from confluence_md.content_converter.registry import element_handlers
from confluence_md.models.conversion_options import ReferenceKind

logger = logging.getLogger(__name__)

DEFAULT_ALT_TEXT = "image"
USER_ID_ATTRIBUTES = ("ri:account-id", "ri:userkey", "ri:username")


@element_handlers.register("a")
def convert_hyperlink(tag, ctx) -> str:
    text = ctx.convert_children(tag).strip()
    href = attribute(tag, "href").strip()
    if not href:
        return text

    kind = ReferenceKind.ANCHOR if href.startswith("#") else ReferenceKind.URL
    return format_link(text, ctx.resolve_link(href, kind))


def _link_body(tag, ctx) -> str:
    rich_body = find_child(tag, "ac:link-body")
    if rich_body is not None:
        return ctx.convert_children(rich_body).strip()
    plain_body = find_child(tag, "ac:plain-text-link-body")
    if plain_body is not None:
        return element_text(plain_body).strip()
    return ""


@element_handlers.register("ac:link")
def convert_confluence_link(tag, ctx) -> str:
    body = _link_body(tag, ctx)
    anchor = attribute(tag, "ac:anchor").strip()

    user = find_child(tag, "ri:user")
    if user is not None:
        account = next((attribute(user, name) for name in USER_ID_ATTRIBUTES if attribute(user, name)), "")
        return body or f"@user:{account}"

    page = find_child(tag, "ri:page")
    if page is not None:
        title = attribute(page, "ri:content-title").strip()
        target = ctx.resolve_link(title, ReferenceKind.PAGE) if title else ""
        if anchor:
            target = f"{target}#{anchor}"
        text = body or title or anchor
        return format_link(text, target) if target else text

    attachment = find_child(tag, "ri:attachment")
    if attachment is not None:
        filename = attribute(attachment, "ri:filename").strip()
        if filename:
            ctx.assets.record(filename, ReferenceKind.ATTACHMENT)
            return format_link(body or filename, ctx.resolve_link(filename, ReferenceKind.ATTACHMENT))

    url = find_child(tag, "ri:url")
    if url is not None:
        value = attribute(url, "ri:value").strip()
        if value:
            return format_link(body or value, ctx.resolve_link(value, ReferenceKind.URL))

    if anchor:
        return format_link(body or anchor, ctx.resolve_link(f"#{anchor}", ReferenceKind.ANCHOR))

    ctx.warn("Confluence link without a recognised target rendered as text")
    return body


def render_image(tag, ctx, alt: str, source: str) -> str:
    """Record an image asset and render it as an embed or a plain link."""
    alt = alt.strip() or DEFAULT_ALT_TEXT
    source = source.strip()
    if not source:
        ctx.warn("Image without a source rendered as its alt text")
        return alt

    ctx.assets.record(source, ReferenceKind.IMAGE)
    target = ctx.resolve_link(source, ReferenceKind.IMAGE)
    if ctx.options.emit_images:
        markup = f"![{alt}]({target})"
    else:
        markup = format_link(alt, target)

    if ctx.state.in_table_cell or in_inline_context(tag):
        return markup
    return f"\n{markup}\n\n"


@element_handlers.register("ac:image")
def convert_confluence_image(tag, ctx) -> str:
    alt = attribute(tag, "ac:alt") or attribute(tag, "ac:title")

    source = ""
    url = find_child(tag, "ri:url")
    if url is not None:
        source = attribute(url, "ri:value")
    attachment = find_child(tag, "ri:attachment")
    if not source and attachment is not None:
        source = attribute(attachment, "ri:filename")

    return render_image(tag, ctx, alt, source)


@element_handlers.register("img")
def convert_html_image(tag, ctx) -> str:
    return render_image(tag, ctx, attribute(tag, "alt"), attribute(tag, "src"))
