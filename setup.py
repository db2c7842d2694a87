#!/usr/bin/env python

"""Set up the pydataconn package.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

This package can be installed using pip as follows:

    pip install pydataconn

To install what the test suite needs:

    pip install 'pydataconn[test]'
"""

import os
import re

from setuptools import setup

with open(os.path.join(os.path.dirname(__file__), 'pydataconn', '__init__.py')) as v:
    m = re.search(r"^ *__version__ *= *'(.*?)'", v.read(), re.M)
    if m is None:
        raise RuntimeError("Cannot detect version in pydataconn/__init__.py")
    VERSION = m.group(1)

readme = os.path.join(os.path.dirname(__file__), 'README.rst')

setup(
    name='pydataconn',
    version=VERSION,
    description='Parameterized commands and buffered results for PEP 249 drivers',
    keywords='database dbapi sql select result',
    packages=['pydataconn'],
    license='BSD License',
    long_description=open(readme).read(),
    python_requires='>=3.7',
    install_requires=['tzlocal>=3.0'],
    extras_require=dict(test=['pytest']),
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: SQL',
        'Topic :: Database :: Front-Ends',
    ],
)
