#!/usr/bin/env python

"""Set up the mysqlez package.

(C) Copyright 2025 The mysqlez Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

This package can be installed using pip as follows:

    pip install mysqlez

To install with cryptography:

    pip install 'mysqlez[crypto]'

cryptography is needed by PyMySQL to authenticate with the
sha256_password and caching_sha2_password plugins over plain connections.
"""

import os
import re

from setuptools import setup

with open(os.path.join(os.path.dirname(__file__), 'mysqlez', '__init__.py')) as v:
    m = re.search(r"^ *__version__ *= *'(.*?)'", v.read(), re.M)
    if m is None:
        raise RuntimeError("Cannot detect version in mysqlez/__init__.py")
    VERSION = m.group(1)

readme = os.path.join(os.path.dirname(__file__), 'README.rst')

setup(
    name='mysqlez',
    version=VERSION,
    author='mysqlez developers',
    description='Parameterized query helpers and INSERT builders for MySQL',
    keywords='mysql mariadb pymysql sql',
    packages=['mysqlez'],
    license='BSD License',
    long_description=open(readme).read(),
    python_requires='>=3.7',
    install_requires=['PyMySQL>=1.1,<1.2'],
    extras_require=dict(crypto='cryptography>=2.6.1',
                        test=['pytest']),
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: SQL',
        'Topic :: Database :: Front-Ends',
    ],
)
