#!/usr/bin/env python
# encoding: utf-8
"""
chill.tests
"""

import unittest
from chill.tests import package, paths, revisions, documents, views, transport, actions, \
                        nonblocking, blocking

def suite():
    suite = unittest.TestSuite()
    suite.addTest(package.suite())
    suite.addTest(paths.suite())
    suite.addTest(revisions.suite())
    suite.addTest(documents.suite())
    suite.addTest(views.suite())
    suite.addTest(transport.suite())
    suite.addTest(actions.suite())
    suite.addTest(nonblocking.suite())
    suite.addTest(blocking.suite())
    return suite


if __name__ == '__main__':
    unittest.main(defaultTest='suite')
