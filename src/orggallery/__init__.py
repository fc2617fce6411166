from .config import (
    DEFAULTS as DEFAULTS,
    DEFAULT_SETTINGS as DEFAULT_SETTINGS,
    GallerySettings as GallerySettings,
    settings_from_mapping as settings_from_mapping,
)
from .document import (
    OrgDocument as OrgDocument,
    OrgHeading as OrgHeading,
    parse_org as parse_org,
)
from .errors import (
    GalleryError as GalleryError,
    NoHeadingError as NoHeadingError,
    PositionError as PositionError,
)
from .extract import (
    extract_gallery as extract_gallery,
    extract_image as extract_image,
    find_galleries as find_galleries,
)
from .links import (
    LinkParts as LinkParts,
    decompose_link as decompose_link,
)
from .models import (
    Gallery as Gallery,
    Image as Image,
    gallery_to_ir as gallery_to_ir,
    image_to_ir as image_to_ir,
)
from .properties import (
    property_key as property_key,
    resolve_property as resolve_property,
)
from .validation import (
    validate_gallery as validate_gallery,
    ValidationIssue as ValidationIssue,
    ValidationResult as ValidationResult,
)
