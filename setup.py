#!/usr/bin/env python
from setuptools import setup
import codecs
import os.path
import re

HERE = os.path.dirname(os.path.abspath(__file__))

def read(*path):
    with codecs.open(os.path.join(HERE, *path), encoding='utf-8') as f:
        return f.read()

VERSION = re.search(r"^__version__ = '([^']+)'", read('chill', '__init__.py'), re.M).group(1)
README = read('README.rst') if os.path.exists(os.path.join(HERE, 'README.rst')) else ''

setup(
    name='chill',
    version=VERSION,
    packages=['chill', 'chill.tests'],
    description='A typed CouchDB client with blocking and tornado-based async transports',
    long_description=README,
    python_requires='>=3.6',
    install_requires=[
        'tornado>=6',
        'requests>=2',
    ],
    extras_require={
        'speedups': ['simplejson'],
        'test': ['pytest'],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Database :: Front-Ends',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ]
)
