from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Image:
    title: Optional[str]
    file: Optional[str]
    artist: Optional[str]
    source: Optional[str]
    description: str


@dataclass(frozen=True)
class Gallery:
    title: str
    description: str
    images: Tuple[Image, ...]


def image_to_ir(image: Image) -> Dict[str, Any]:
    return {
        'title': image.title,
        'file': image.file,
        'artist': image.artist,
        'source': image.source,
        'description': image.description,
    }


def gallery_to_ir(gallery: Gallery) -> Dict[str, Any]:
    return {
        'title': gallery.title,
        'description': gallery.description,
        'images': [image_to_ir(i) for i in gallery.images],
    }
