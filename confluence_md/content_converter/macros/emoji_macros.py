"""Emoji macros and emoticon elements."""

from confluence_md.content_converter.emoticons import resolve_emoji, shortcode_to_symbol
from confluence_md.content_converter.nodes import attribute
from confluence_md.content_converter.registry import element_handlers, macro_handlers


@macro_handlers.register("emoji", "emoticon")
def render_emoji_macro(call, ctx) -> str:
    emoji_id = call.parameter("emoji-id") or call.parameter("id")
    if emoji_id:
        return resolve_emoji(
            emoji_id=emoji_id,
            shortname=call.parameter("shortname"),
            fallback=call.parameter("fallback"),
        )
    value = (call.parameter("emoji") or call.parameter("shortname") or call.parameter("")).strip()
    return shortcode_to_symbol(value) if value.startswith(":") else value


@element_handlers.register("ac:emoticon", "ac:emoji")
def convert_emoticon(tag, ctx) -> str:
    return resolve_emoji(
        emoji_id=attribute(tag, "ac:emoji-id"),
        shortname=attribute(tag, "ac:emoji-shortname") or attribute(tag, "ac:shortname"),
        fallback=attribute(tag, "ac:emoji-fallback"),
        legacy_name=attribute(tag, "ac:name"),
    )
