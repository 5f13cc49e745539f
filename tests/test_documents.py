import sys
import os
import base64
import tempfile
import unittest
from pathlib import Path

current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, '..'))

# Add the project root to the system path
sys.path.insert(0, project_root)

from utils.documents import XML_CONTENT_TYPE, build_form_document, read_form_document

FORMS_DIR = Path(current_dir) / 'e2e' / 'enketo' / 'forms'


class TestReadFormDocument(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.xml = '<h:html><h:title>Ünïcode form</h:title></h:html>\n'.encode('utf-8')
        Path(self.tmp.name, 'my-form.xml').write_bytes(self.xml)

    def test_builds_document_from_file(self):
        doc = read_form_document('my-form', self.tmp.name).to_doc()

        self.assertEqual(doc['_id'], 'form:my-form')
        self.assertEqual(doc['internalId'], 'my-form')
        self.assertEqual(doc['title'], 'Form my-form')
        self.assertEqual(doc['type'], 'form')
        self.assertEqual(doc['_attachments']['xml']['content_type'], XML_CONTENT_TYPE)

    def test_attachment_is_the_file_bytes(self):
        doc = read_form_document('my-form', self.tmp.name)

        self.assertEqual(doc.xml, self.xml)
        self.assertEqual(doc.to_doc()['_attachments']['xml']['data'], base64.b64encode(self.xml).decode('ascii'))

    def test_missing_form_raises(self):
        with self.assertRaises(FileNotFoundError):
            read_form_document('not-there', self.tmp.name)


class TestBuildFormDocument(unittest.TestCase):

    def test_explicit_identifiers(self):
        doc = build_form_document('<xml/>', 'form:dd', 'DD', 'Default Delivery')

        self.assertEqual(doc.id, 'form:dd')
        self.assertEqual(doc.internalId, 'DD')
        self.assertEqual(doc.title, 'Default Delivery')
        self.assertEqual(doc.xml, b'<xml/>')


class TestSuiteForms(unittest.TestCase):

    def test_repeat_forms_declare_matching_instance_ids(self):
        for form_id in ('repeat-translation-count', 'repeat-translation-button', 'repeat-translation-select'):
            doc = read_form_document(form_id, FORMS_DIR)
            self.assertIn(f'id="{form_id}"'.encode(), doc.xml)

    def test_translated_forms_carry_all_languages(self):
        for form_id in ('repeat-translation-count', 'repeat-translation-button'):
            xml = read_form_document(form_id, FORMS_DIR).xml.decode('utf-8')
            for lang in ('en', 'ne', 'sw'):
                self.assertIn(f'lang="{lang}"', xml)
            self.assertIn('ML (NE)', xml)
            self.assertIn('ML (SV)', xml)


if __name__ == '__main__':
    unittest.main()
