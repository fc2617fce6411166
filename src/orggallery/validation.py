import os
from dataclasses import dataclass
from typing import List, Optional, Set

from .models import Gallery


@dataclass
class ValidationIssue:
    path: str
    message: str
    severity: str = "error"  # 'error' | 'warn'


@dataclass
class ValidationResult:
    issues: List[ValidationIssue]

    def ok(self) -> bool:
        return all(i.severity != 'error' for i in self.issues)


def _local_path(target: str) -> Optional[str]:
    """Filesystem path for a 'file:' link target, None for other link types."""
    if target.startswith('file:'):
        return target[len('file:') :].split('::', 1)[0]
    if ':' in target.split('/', 1)[0]:
        return None
    return target


def validate_gallery(
    gallery: Gallery, base_dir: Optional[str] = None, strict_assets: bool = False
) -> ValidationResult:
    """Validate a parsed gallery.

    strict_assets: when True missing image files are upgraded from warn to error.
    """
    issues: List[ValidationIssue] = []
    if not gallery.images:
        issues.append(ValidationIssue(path="/images", message="Gallery has no images", severity='warn'))
    seen_files: Set[str] = set()
    for idx, image in enumerate(gallery.images):
        ipath = f"/images/{idx}"
        if image.file is None:
            issues.append(ValidationIssue(path=f"{ipath}/file", message="Image heading is not a link"))
            continue
        if image.title is None:
            issues.append(
                ValidationIssue(path=f"{ipath}/title", message="Image link has no description", severity='warn')
            )
        if image.file in seen_files:
            issues.append(
                ValidationIssue(
                    path=f"{ipath}/file", message=f"Duplicate image '{image.file}'", severity='warn'
                )
            )
        else:
            seen_files.add(image.file)
        local = _local_path(image.file)
        if local is None:
            continue
        full = os.path.expanduser(local)
        if base_dir and not os.path.isabs(full):
            full = os.path.join(base_dir, full)
        if not os.path.exists(full):
            issues.append(
                ValidationIssue(
                    path=f"{ipath}/file",
                    message=f"Image file not found: {local}",
                    severity='error' if strict_assets else 'warn',
                )
            )
    return ValidationResult(issues)
