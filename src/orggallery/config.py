from dataclasses import dataclass
from typing import Mapping

# Tag and property-prefix names; fixed for the lifetime of the process
DEFAULTS = {
    'GALLERY_TAG': 'gallery',
    'GALLERY_PREFIX': 'GALLERY',
    'IMAGE_PREFIX': 'IMAGE',
}


@dataclass(frozen=True)
class GallerySettings:
    gallery_tag: str = DEFAULTS['GALLERY_TAG']
    gallery_prefix: str = DEFAULTS['GALLERY_PREFIX']
    image_prefix: str = DEFAULTS['IMAGE_PREFIX']


DEFAULT_SETTINGS = GallerySettings()


def settings_from_mapping(mapping: Mapping[str, str]) -> GallerySettings:
    """Overlay known keys of ``mapping`` onto DEFAULTS.

    Keys are matched case-insensitively; unknown keys and blank values are ignored.
    """
    d = DEFAULTS.copy()
    for k, v in mapping.items():
        key = str(k).strip().upper()
        if key in d and v is not None and str(v).strip() != '':
            d[key] = str(v).strip()
    return GallerySettings(
        gallery_tag=d['GALLERY_TAG'],
        gallery_prefix=d['GALLERY_PREFIX'],
        image_prefix=d['IMAGE_PREFIX'],
    )
