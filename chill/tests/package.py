# -*- coding: utf-8 -*-
"""
chill.tests.package
"""
import unittest
import chill

class PackageTestCase(unittest.TestCase):

    def test_exports(self):
        expected = set([
        'Couch', 'Database', 'defaults', 'DocumentPath', 'ViewPath', 'Revision', 'Document',
        'Design', 'ViewFunction', 'ReducedView', 'UnreducedView', 'CreateDatabase',
        'CreateDocument', 'ReadDocument', 'UpdateDocument', 'DeleteDocument', 'ExecuteView',
        'ReadAllDocuments', 'Error', 'HTTPError', 'DatabaseExists', 'DocumentConflict',
        'NotFound', 'Unauthorized', 'ServerResponseError', 'TransportError'
        ])
        exported = set(e for e in dir(chill) if not e.startswith('_'))
        self.assertTrue(expected <= exported)
        self.assertTrue(set(chill.__all__) <= exported)

    def test_version(self):
        self.assertRegex(chill.__version__, r'^\d+\.\d+\.\d+$')

def suite():
    suite = unittest.TestSuite()
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(PackageTestCase))
    return suite

if __name__ == '__main__':
    unittest.main(defaultTest='suite')
