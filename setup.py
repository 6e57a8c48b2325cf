#!/usr/bin/env python

from setuptools import setup
from sys import version_info


if version_info < (3, 8):
    raise RuntimeError("Requires Python 3.8 or later.")

VERSION = '0.1b1'

with open('README.rst') as readme_file:
    readme = readme_file.read()

with open('HISTORY.rst') as history_file:
    history = history_file.read()


setup(
    name='domeq',
    version=VERSION,
    description="Equality assertions for XML document trees by their canonical forms.",
    long_description=readme + '\n\n' + history,
    author="Frank Sachsenheim",
    author_email='funkyfuture@riseup.net',
    packages=['domeq'],
    package_dir={'domeq': 'domeq'},
    include_package_data=True,
    install_requires=('lxml',),
    extras_require={'test': ['pytest']},
    license="AGPLv3+",
    zip_safe=False,
    keywords='domeq xml dom c14n comparison equality assertion testing',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU Affero General Public License v3 '
        'or later (AGPLv3+)',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: Software Development :: Testing',
        'Topic :: Text Processing :: Markup :: XML'
    ],
    test_suite='tests',
)
