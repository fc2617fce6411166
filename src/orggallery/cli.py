#!/usr/bin/env python3
"""Command line interface for org-gallery

Subcommands:
  list      show gallery headings with their line numbers
  ir        parse galleries and emit JSON
  validate  parse galleries and check their images

"""

import argparse
import json
import os
import sys

from . import OrgDocument, extract_gallery, find_galleries, gallery_to_ir, settings_from_mapping
from .errors import GalleryError
from .validation import validate_gallery


def _settings(args):
    return settings_from_mapping(
        {
            'GALLERY_TAG': args.tag,
            'GALLERY_PREFIX': args.gallery_prefix,
            'IMAGE_PREFIX': args.image_prefix,
        }
    )


def _load(args):
    try:
        return OrgDocument.from_file(args.org)
    except (OSError, UnicodeDecodeError) as e:
        print(f"ERROR: cannot read {args.org}: {e}", file=sys.stderr)
        sys.exit(1)


def _gallery_positions(doc, args, settings):
    """Positions to extract: the --line target, or every tagged gallery."""
    line = getattr(args, 'line', None)
    if line is not None:
        return [line - 1]
    return find_galleries(doc, settings)


def cmd_list(args):
    doc = _load(args)
    settings = _settings(args)
    for pos in find_galleries(doc, settings):
        print(f"{pos + 1}: {doc.raw_item_text(pos)}")


def cmd_ir(args):
    doc = _load(args)
    settings = _settings(args)
    try:
        galleries = [
            gallery_to_ir(extract_gallery(doc, pos, settings))
            for pos in _gallery_positions(doc, args, settings)
        ]
    except GalleryError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps({'galleries': galleries}, indent=2))


def cmd_validate(args):
    doc = _load(args)
    settings = _settings(args)
    base_dir = os.path.dirname(os.path.abspath(args.org))
    positions = find_galleries(doc, settings)
    if not positions:
        print(f"WARN: no headings tagged :{settings.gallery_tag}:")
    ok = True
    for pos in positions:
        gallery = extract_gallery(doc, pos, settings)
        result = validate_gallery(gallery, base_dir=base_dir, strict_assets=args.strict_assets)
        for issue in result.issues:
            print(f"{issue.severity.upper()}: line {pos + 1}{issue.path}: {issue.message}")
        ok = ok and result.ok()
    if ok:
        print("Galleries valid: no errors")
    else:
        sys.exit(1)


def build_parser():
    p = argparse.ArgumentParser(prog='orggallery')
    p.add_argument('--tag', default=None, help='gallery tag name (default: gallery)')
    p.add_argument('--gallery-prefix', default=None, help='gallery property prefix (default: GALLERY)')
    p.add_argument('--image-prefix', default=None, help='image property prefix (default: IMAGE)')
    sub = p.add_subparsers(dest='command', required=True)

    lst = sub.add_parser('list', help='list gallery headings')
    lst.add_argument('org')
    lst.set_defaults(func=cmd_list)

    irp = sub.add_parser('ir', help='emit gallery JSON')
    irp.add_argument('org')
    irp.add_argument(
        '--line', type=int, help='1-based line inside the gallery to parse (default: all galleries)'
    )
    irp.set_defaults(func=cmd_ir)

    val = sub.add_parser('validate', help='validate galleries')
    val.add_argument('org')
    val.add_argument(
        '--strict-assets', action='store_true', help='treat missing image files as errors'
    )
    val.set_defaults(func=cmd_validate)
    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == '__main__':
    main()
