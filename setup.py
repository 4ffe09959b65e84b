#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import re
from pathlib import Path

from setuptools import find_packages, setup

# XXX: read the version without importing the package, its dependencies are not available at build time
_version_file = Path(__file__).parent / 'thrift_schema' / 'version.py'
__version__ = re.search(r"__version__ = '([^']+)'", _version_file.read_text()).group(1)

install_requires = [
    'colorama',
    'configargparse',
    'pydantic>=2',
    'pyyaml',
    'structlog',
    'typing_extensions',
]

setup(
    name='thrift-schema',
    version=__version__,
    description='Schema-driven value codec for the Thrift type system',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache License 2.0',
    entry_points={
        'console_scripts': ['thrift-schema=thrift_schema_cli.main:main'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.10',
    packages=find_packages(exclude=('thrift_schema_tests', 'thrift_schema_tests.*')),
    package_data={
        'thrift_schema.conf': ['*.yml'],
    },
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
)
