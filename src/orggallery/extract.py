import warnings
from typing import List, Optional

from .config import DEFAULT_SETTINGS, GallerySettings
from .document import OrgDocument
from .links import decompose_link
from .models import Gallery, Image
from .properties import ARTIST, SOURCE, property_key, resolve_property


def extract_image(
    document: OrgDocument,
    pos: int,
    gallery_artist: Optional[str] = None,
    settings: GallerySettings = DEFAULT_SETTINGS,
) -> Image:
    """Build an Image from the heading at ``pos``.

    Missing pieces surface as None (or "" for the description); malformed
    input never raises.
    """
    item = document.raw_item_text(pos)
    parts = decompose_link(item)
    if parts.link is None:
        warnings.warn(
            f"Image heading on line {pos + 1} has no link: {item!r}",
            UserWarning,
        )
    artist = resolve_property(
        document, property_key(settings.image_prefix, ARTIST), pos, default=gallery_artist
    )
    source = resolve_property(document, property_key(settings.image_prefix, SOURCE), pos)
    return Image(
        title=parts.description,
        file=parts.link,
        artist=artist,
        source=source,
        description=document.body_text(pos),
    )


def extract_gallery(
    document: OrgDocument,
    pos: Optional[int] = None,
    settings: GallerySettings = DEFAULT_SETTINGS,
) -> Gallery:
    """Parse the gallery whose heading is at or before ``pos``.

    ``pos`` defaults to ``document.point``. The caller is expected to have
    checked the gallery tag; only direct children become images.
    """
    if pos is None:
        pos = document.point
    anchor = pos if document.is_at_heading(pos) else document.previous_heading(pos)
    child_level = document.heading_level(anchor) + 1
    gallery_artist = resolve_property(
        document, property_key(settings.gallery_prefix, ARTIST), anchor
    )
    images: List[Image] = []
    with document.narrowed(anchor):
        for child in document.entries(level=child_level):
            images.append(extract_image(document, child, gallery_artist, settings))
    return Gallery(
        title=document.raw_item_text(anchor),
        description=document.body_text(anchor),
        images=tuple(images),
    )


def find_galleries(document: OrgDocument, settings: GallerySettings = DEFAULT_SETTINGS) -> List[int]:
    """Positions of every heading tagged as a gallery, in document order."""
    return document.entries(tag=settings.gallery_tag)
