#!/usr/bin/env python3
"""Tests for gallery and image extraction"""

import dataclasses
import os
import sys
import unittest
import warnings
from textwrap import dedent
from unittest import mock

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))

import orggallery as og

ORG = dedent(
    """\
    * Before
    ** [[file:before.jpg][Sibling outside]]
    * Gallery title                                  :gallery:
    :PROPERTIES:
    :GALLERY_ARTIST: Ada
    :GALLERY_SOURCE: https://example.org/gallery
    :END:
    Some words about
    the gallery.
    ** [[file:foo.jpg][Image title]]
    A photo.
    *** [[file:grandchild.jpg][Grandchild]]
    ** [[file:bar.jpg]]
    :PROPERTIES:
    :IMAGE_ARTIST: Grace
    :IMAGE_SOURCE: scan
    :END:
    ** not a link
    * After
    ** [[file:after.jpg][Sibling after]]
    """
)

GALLERY_LINE = 2


class TestExtractImage(unittest.TestCase):
    def setUp(self):
        self.doc = og.OrgDocument.from_string(ORG)

    def test_image_with_gallery_artist_fallback(self):
        image = og.extract_image(self.doc, 9, gallery_artist='Ada')
        self.assertEqual(
            image,
            og.Image(
                title='Image title',
                file='file:foo.jpg',
                artist='Ada',
                source=None,
                description='A photo.',
            ),
        )

    def test_own_artist_and_source(self):
        image = og.extract_image(self.doc, 12, gallery_artist='Ada')
        self.assertEqual(image.artist, 'Grace')
        self.assertEqual(image.source, 'scan')
        self.assertIsNone(image.title)
        self.assertEqual(image.file, 'file:bar.jpg')
        self.assertEqual(image.description, '')

    def test_no_gallery_artist(self):
        self.assertIsNone(og.extract_image(self.doc, 9).artist)

    def test_heading_without_link_degrades(self):
        with self.assertWarns(UserWarning):
            image = og.extract_image(self.doc, 17, gallery_artist='Ada')
        self.assertIsNone(image.title)
        self.assertIsNone(image.file)
        self.assertEqual(image.artist, 'Ada')

    def test_custom_prefix(self):
        doc = og.OrgDocument.from_string("* [[a.jpg]]\n:PROPERTIES:\n:PIC_ARTIST: Lin\n:END:\n")
        settings = og.GallerySettings(image_prefix='PIC')
        self.assertEqual(og.extract_image(doc, 0, settings=settings).artist, 'Lin')


class TestExtractGallery(unittest.TestCase):
    def setUp(self):
        self.doc = og.OrgDocument.from_string(ORG)

    def _extract(self, pos):
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', UserWarning)
            return og.extract_gallery(self.doc, pos)

    def test_gallery_fields(self):
        gallery = self._extract(GALLERY_LINE)
        self.assertEqual(gallery.title, 'Gallery title')
        self.assertEqual(gallery.description, 'Some words about\nthe gallery.')
        self.assertEqual(len(gallery.images), 3)

    def test_only_direct_children_in_document_order(self):
        files = [i.file for i in self._extract(GALLERY_LINE).images]
        self.assertEqual(files, ['file:foo.jpg', 'file:bar.jpg', None])
        self.assertNotIn('file:grandchild.jpg', files)
        self.assertNotIn('file:before.jpg', files)
        self.assertNotIn('file:after.jpg', files)

    def test_source_never_falls_back_to_gallery(self):
        first = self._extract(GALLERY_LINE).images[0]
        self.assertEqual(first.artist, 'Ada')
        self.assertIsNone(first.source)

    def test_anchor_found_from_body_line(self):
        self.assertEqual(self._extract(7), self._extract(GALLERY_LINE))

    def test_anchor_found_from_child_body_is_that_child(self):
        # Line 10 is under the first image; its heading becomes the anchor
        gallery = self._extract(10)
        self.assertEqual(gallery.title, '[[file:foo.jpg][Image title]]')
        self.assertEqual([i.title for i in gallery.images], ['Grandchild'])

    def test_title_is_not_link_decomposed(self):
        doc = og.OrgDocument.from_string("* [[file:cover.jpg][Cover]] :gallery:\n")
        self.assertEqual(og.extract_gallery(doc, 0).title, '[[file:cover.jpg][Cover]]')

    def test_default_position_is_point(self):
        self.doc.point = GALLERY_LINE
        self.assertEqual(self._extract(None).title, 'Gallery title')

    def test_no_enclosing_heading(self):
        doc = og.OrgDocument.from_string("#+TITLE: x\nloose text\n* Heading\n")
        with self.assertRaises(og.NoHeadingError):
            og.extract_gallery(doc, 1)

    def test_records_are_frozen(self):
        gallery = self._extract(GALLERY_LINE)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            gallery.title = 'changed'
        with self.assertRaises(dataclasses.FrozenInstanceError):
            gallery.images[0].file = 'other.jpg'
        self.assertIsInstance(gallery.images, tuple)

    def test_scope_released_after_success(self):
        self._extract(GALLERY_LINE)
        self.assertIsNone(self.doc.restriction)
        self.assertEqual(self.doc.entries(level=1), [0, 2, 18])

    def test_scope_released_after_failure(self):
        with mock.patch('orggallery.extract.extract_image', side_effect=RuntimeError('boom')):
            with self.assertRaises(RuntimeError):
                og.extract_gallery(self.doc, GALLERY_LINE)
        self.assertIsNone(self.doc.restriction)
        self.assertIn(19, self.doc.entries(level=2))

    def test_document_not_mutated(self):
        before = [dataclasses.replace(h, props=dict(h.props)) for h in self.doc.headings]
        self._extract(GALLERY_LINE)
        self.assertEqual(self.doc.headings, before)

    def test_empty_gallery(self):
        doc = og.OrgDocument.from_string("* Empty :gallery:\n* Next\n** [[x.jpg][X]]\n")
        gallery = og.extract_gallery(doc, 0)
        self.assertEqual(gallery, og.Gallery(title='Empty', description='', images=()))

    def test_find_galleries(self):
        self.assertEqual(og.find_galleries(self.doc), [GALLERY_LINE])
        settings = og.GallerySettings(gallery_tag='album')
        self.assertEqual(og.find_galleries(self.doc, settings), [])


class TestIr(unittest.TestCase):
    def test_gallery_to_ir(self):
        gallery = og.Gallery(
            title='T',
            description='',
            images=(og.Image(title=None, file='a.jpg', artist=None, source=None, description=''),),
        )
        self.assertEqual(
            og.gallery_to_ir(gallery),
            {
                'title': 'T',
                'description': '',
                'images': [
                    {'title': None, 'file': 'a.jpg', 'artist': None, 'source': None, 'description': ''}
                ],
            },
        )


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(og.DEFAULT_SETTINGS.gallery_tag, 'gallery')
        self.assertEqual(og.DEFAULT_SETTINGS.gallery_prefix, 'GALLERY')
        self.assertEqual(og.DEFAULT_SETTINGS.image_prefix, 'IMAGE')

    def test_settings_from_mapping(self):
        s = og.settings_from_mapping({'gallery_tag': 'album', 'IMAGE_PREFIX': ' ', 'OTHER': 'x'})
        self.assertEqual(s, og.GallerySettings(gallery_tag='album'))


if __name__ == '__main__':
    unittest.main()
