"""Conversion options and link rewrite policies.

A ConversionOptions value is immutable and is supplied once per conversion.
Link targets found in the document are passed through the configured
link_rewrite_policy together with a ReferenceKind describing what they
point at; the policy returns the target written into the Markdown.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
from urllib.parse import quote, urlsplit

from confluence_md.file_mapper.filesafe_converter import FilesafeConverter


class ReferenceKind(str, Enum):
    """What a link target found in the document refers to."""

    PAGE = "page"
    ATTACHMENT = "attachment"
    IMAGE = "image"
    URL = "url"
    ANCHOR = "anchor"


LinkRewritePolicy = Callable[[str, ReferenceKind], str]


def is_remote_reference(target: str) -> bool:
    """Return True when target carries a URL scheme or is protocol-relative."""
    if target.startswith("//"):
        return True
    scheme = urlsplit(target).scheme
    # single letters are drive names, not schemes
    return len(scheme) > 1


@dataclass(frozen=True)
class RelativePathPolicy:
    """Default link rewrite policy producing relative local paths.

    Pages become sibling Markdown files named after their title, images and
    attachments are placed in fixed subdirectories. URLs and anchors, and
    images or attachments that already point at a remote location, are
    returned unchanged.

    Attributes:
        images_dir: Directory for image references
        attachments_dir: Directory for attachment references
        page_suffix: Extension appended to page file names

    Example:
        >>> policy = RelativePathPolicy()
        >>> policy("Customer Feedback", ReferenceKind.PAGE)
        'Customer-Feedback.md'
        >>> policy("diagram.png", ReferenceKind.IMAGE)
        'images/diagram.png'
    """

    images_dir: str = "images"
    attachments_dir: str = "attachments"
    page_suffix: str = ".md"

    def __call__(self, target: str, kind: ReferenceKind) -> str:
        if kind in (ReferenceKind.URL, ReferenceKind.ANCHOR):
            return target
        if kind == ReferenceKind.PAGE:
            filename = FilesafeConverter.title_to_filename(target, suffix=self.page_suffix)
            return quote(filename)
        if is_remote_reference(target):
            return target

        directory = self.images_dir if kind == ReferenceKind.IMAGE else self.attachments_dir
        filename = quote(FilesafeConverter.asset_filename(target))
        directory = directory.strip("/")
        return f"{directory}/{filename}" if directory else filename


@dataclass(frozen=True)
class ConversionOptions:
    """Options controlling a single conversion.

    Attributes:
        compact_tables: Emit tables without column padding
        preserve_anchors: Emit HTML anchors for anchor macros and headings
        link_rewrite_policy: Callable mapping (target, kind) to the emitted target
        emit_images: Emit image embeds; when False images become plain links
    """

    compact_tables: bool = False
    preserve_anchors: bool = False
    link_rewrite_policy: LinkRewritePolicy = field(default_factory=RelativePathPolicy)
    emit_images: bool = True
