"""Emoji and emoticon resolution.

Confluence identifies emoji by code point id (e.g. '1f642'), by shortcode
(':slight_smile:'), or for legacy emoticons by a name such as 'thumbs-up'.
"""

import re
from types import MappingProxyType
from typing import Optional

import emoji

LEGACY_EMOTICONS = MappingProxyType({
    "smile": "\U0001F642",
    "sad": "\U0001F641",
    "cheeky": "\U0001F61B",
    "laugh": "\U0001F600",
    "wink": "\U0001F609",
    "thumbs-up": "\U0001F44D",
    "thumbs-down": "\U0001F44E",
    "information": "ℹ️",
    "tick": "✅",
    "cross": "❌",
    "warning": "⚠️",
    "plus": "➕",
    "minus": "➖",
    "question": "❓",
    "light-on": "\U0001F4A1",
    "light-off": "\U0001F4A1",
    "yellow-star": "⭐",
    "red-star": "⭐",
    "green-star": "⭐",
    "blue-star": "⭐",
    "heart": "❤️",
    "broken-heart": "\U0001F494",
})

_CODE_POINT_RE = re.compile(r"^[0-9a-fA-F]{1,6}$")
_ID_PREFIXES = ("emoji-", "emoji/")


def emoji_id_to_unicode(emoji_id: str) -> Optional[str]:
    """Decode a hyphen separated code point id such as '1f1e9-1f1ea'.

    Returns None for ids that are not code point sequences, which is the
    case for custom emoji uploaded to a site.
    """
    identifier = emoji_id.strip().lower()
    for prefix in _ID_PREFIXES:
        if identifier.startswith(prefix):
            identifier = identifier[len(prefix):]
    identifier = identifier.replace("_", "-")

    parts = [part for part in identifier.split("-") if part]
    if not parts or not all(_CODE_POINT_RE.match(part) for part in parts):
        return None

    code_points = [int(part, 16) for part in parts]
    if any(code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF for code_point in code_points):
        return None
    return "".join(chr(code_point) for code_point in code_points)


def lookup_shortcode(shortcode: str) -> Optional[str]:
    """Return the emoji for a shortcode, or None if it is not known."""
    name = shortcode.strip().strip(":")
    if not name:
        return None
    code = f":{name}:"
    symbol = emoji.emojize(code, language="alias")
    if symbol != code:
        return symbol
    return LEGACY_EMOTICONS.get(name)


def shortcode_to_symbol(shortcode: str) -> str:
    """Resolve a shortcode, passing unknown shortcodes through unchanged.

    Example:
        >>> shortcode_to_symbol(":thumbsup:")
        '👍'
        >>> shortcode_to_symbol(":not-an-emoji:")
        ':not-an-emoji:'
    """
    return lookup_shortcode(shortcode) or shortcode


def resolve_emoji(
    emoji_id: str = "",
    shortname: str = "",
    fallback: str = "",
    legacy_name: str = "",
) -> str:
    """Pick the best rendering from the attributes Confluence provides."""
    if emoji_id:
        decoded = emoji_id_to_unicode(emoji_id)
        if decoded:
            return decoded
    if shortname:
        symbol = lookup_shortcode(shortname)
        if symbol:
            return symbol
    if fallback.strip():
        return fallback.strip()
    if legacy_name.strip() in LEGACY_EMOTICONS:
        return LEGACY_EMOTICONS[legacy_name.strip()]
    return shortname.strip()
