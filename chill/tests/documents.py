#!/usr/bin/env python
# encoding: utf-8
"""
chill.tests.documents
"""

import doctest
import unittest

import chill.document
from chill.document import *
from chill.exceptions import ContentNotAnObject, RevisionParseError
from chill.path import DocumentPath, DocumentId, AttachmentName
from chill.revision import Revision

REV = '1-1234567890abcdef1234567890abcdef'
STUB = {'content_type': 'text/plain', 'digest': 'md5-iMaiC8wqiFlD2NjLTemvCQ==',
        'revpos': 11, 'length': 5, 'stub': True}


class AttachmentTests(unittest.TestCase):

    def test_decode_stub(self):
        att = Attachment.from_json(dict(STUB))
        self.assertTrue(att.saved)
        self.assertTrue(att.is_stub)
        self.assertEqual('text/plain', att.content_type)
        self.assertEqual(11, att.sequence_number)
        self.assertEqual(5, att.content_length)
        self.assertIsNone(att.content)
        self.assertEqual({'stub': True}, att.to_json())

    def test_decode_with_data(self):
        att = Attachment.from_json({'content_type': 'text/plain', 'digest': 'md5-xyz',
                                    'revpos': 2, 'data': 'aGVsbG8='})
        self.assertFalse(att.is_stub)
        self.assertEqual(b'hello', att.content)
        self.assertEqual(5, att.content_length)
        # never re-uploaded
        self.assertEqual({'stub': True}, att.to_json())

    def test_decode_encoding_pair(self):
        att = Attachment.from_json(dict(STUB, encoding='gzip', encoded_length=25))
        self.assertEqual(('gzip', 25), (att.encoding, att.encoded_length))
        self.assertRaises(ValueError, Attachment.from_json, dict(STUB, encoding='gzip'))
        self.assertRaises(ValueError, Attachment.from_json, dict(STUB, encoded_length=25))

    def test_decode_errors(self):
        # length and data are mutually exclusive, and one is required
        self.assertRaises(ValueError, Attachment.from_json, dict(STUB, data='aGVsbG8='))
        no_length = dict(STUB)
        del no_length['length']
        self.assertRaises(ValueError, Attachment.from_json, no_length)
        for field in ('content_type', 'digest', 'revpos'):
            missing = dict(STUB)
            del missing[field]
            self.assertRaises(ValueError, Attachment.from_json, missing)
        self.assertRaises(ValueError, Attachment.from_json, dict(STUB, bogus=1))
        self.assertRaises(ValueError, Attachment.from_json, [])
        self.assertRaises(ValueError, Attachment.from_json,
                          {'content_type': 'text/plain', 'digest': 'x', 'revpos': 1,
                           'data': 'not base64!'})

    def test_unsaved(self):
        att = UnsavedAttachment('text/plain', b'hello')
        self.assertFalse(att.saved)
        self.assertEqual(5, att.content_length)
        self.assertEqual({'content_type': 'text/plain', 'data': 'aGVsbG8='}, att.to_json())
        self.assertRaises(TypeError, UnsavedAttachment, 'text/plain', u'not bytes')


class DocumentTests(unittest.TestCase):

    def test_decode(self):
        doc = Document.from_json('baseball', {
            '_id': 'babe', '_rev': REV, 'name': 'Babe Ruth', 'home_runs': 714,
            '_attachments': {'photo.txt': dict(STUB)}})
        self.assertEqual(DocumentPath('baseball', 'babe'), doc.path)
        self.assertEqual(DocumentId('babe'), doc.document_id)
        self.assertEqual('baseball', doc.database_name)
        self.assertEqual(Revision.parse(REV), doc.revision)
        self.assertFalse(doc.deleted)
        self.assertEqual({'name': 'Babe Ruth', 'home_runs': 714}, doc.get_content())
        self.assertEqual(5, doc.get_attachment('photo.txt').content_length)
        self.assertIsInstance(list(doc.attachments)[0], AttachmentName)

    def test_decode_design_and_deleted(self):
        doc = Document.from_json('db', {'_id': '_design/stat', '_rev': REV, '_deleted': True})
        self.assertTrue(doc.document_id.is_design)
        self.assertTrue(doc.deleted)
        self.assertEqual({}, doc.get_content())

    def test_decode_errors(self):
        self.assertRaises(ValueError, Document.from_json, 'db', {'_rev': REV})
        self.assertRaises(ValueError, Document.from_json, 'db', {'_id': 'foo'})
        self.assertRaises(ValueError, Document.from_json, 'db', [])
        self.assertRaises(ValueError, Document.from_json, 'db',
                          {'_id': 'foo', '_rev': REV, '_deleted': 'yes'})
        self.assertRaises(RevisionParseError, Document.from_json, 'db',
                          {'_id': 'foo', '_rev': 'bad_revision'})

    def test_content_is_an_object(self):
        self.assertRaises(ContentNotAnObject, Document, '/db/foo', REV, [1, 2, 3])
        doc = Document('/db/foo', REV, {'a': 1})
        self.assertRaises(ContentNotAnObject, doc.set_content, 'scalar')
        doc.set_content({'b': 2})
        self.assertEqual({'b': 2}, doc.get_content())

    def test_get_content_is_a_copy(self):
        doc = Document('/db/foo', REV, {'nested': {'a': 1}})
        doc.get_content()['nested']['a'] = 2
        self.assertEqual({'nested': {'a': 1}}, doc.get_content())

    def test_serialize_for_update(self):
        doc = Document.from_json('db', {'_id': 'foo', '_rev': REV, 'a': 1,
                                        '_attachments': {'old.txt': dict(STUB)}})
        doc.insert_attachment('new.txt', b'hello')
        self.assertEqual({
            'a': 1,
            '_attachments': {
                'old.txt': {'stub': True},
                'new.txt': {'content_type': 'text/plain', 'data': 'aGVsbG8='},
            }}, doc.to_json())

        self.assertTrue(doc.remove_attachment('old.txt'))
        self.assertFalse(doc.remove_attachment('old.txt'))
        self.assertTrue(doc.remove_attachment('new.txt'))
        self.assertEqual({'a': 1}, doc.to_json())

    def test_insert_attachment_content_type(self):
        doc = Document('/db/foo', REV)
        doc.insert_attachment('blob', b'\x00\x01')
        self.assertEqual('application/octet-stream', doc.get_attachment('blob').content_type)
        doc.insert_attachment('page', b'<p/>', content_type='text/html')
        self.assertEqual('text/html', doc.get_attachment('page').content_type)

    def test_equality(self):
        body = {'_id': 'foo', '_rev': REV, 'a': 1}
        self.assertEqual(Document.from_json('db', body), Document.from_json('db', dict(body)))
        self.assertNotEqual(Document.from_json('db', body),
                            Document.from_json('db', dict(body, a=2)))


class DesignTests(unittest.TestCase):

    def test_serialize(self):
        design = Design().insert_view('home_run', ViewFunction('function(doc) {}'))
        design.insert_view('total', ViewFunction('function(doc) {}', '_sum'))
        self.assertEqual({'views': {
            'home_run': {'map': 'function(doc) {}'},
            'total': {'map': 'function(doc) {}', 'reduce': '_sum'},
        }}, design.to_json())

    def test_decode(self):
        design = Design.from_json({'views': {'v': {'map': 'm', 'reduce': 'r'}}, 'language': 'js'})
        self.assertEqual(Design({'v': ViewFunction('m', 'r')}), design)
        self.assertRaises(ValueError, Design.from_json, {'views': {'v': {'reduce': 'r'}}})


def suite():
    suite = unittest.TestSuite()
    suite.addTest(doctest.DocTestSuite(chill.document))
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(AttachmentTests))
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(DocumentTests))
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(DesignTests))
    return suite

if __name__ == '__main__':
    unittest.main(defaultTest='suite')
