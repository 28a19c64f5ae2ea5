#!/usr/bin/env python3
# Always prefer setuptools over distutils
import io
import os
import re
from codecs import open  # To use a consistent encoding

from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))


# Stolen from pip
def read(*names, **kwargs):
    with io.open(
            os.path.join(os.path.dirname(__file__), *names),
            encoding=kwargs.get("encoding", "utf8")
    ) as fp:
        return fp.read()


# Stolen from pip
def find_version(*file_paths):
    version_file = read(*file_paths)
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                              version_file, re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


# Get the long description from the relevant file
with open(os.path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='odtree',

    # Versions should comply with PEP440.
    version=find_version('odtree', '__init__.py'),

    description='Ordered interval container with range assignment (old-driver tree)',
    long_description=long_description,

    license='AGPLv3',

    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        'Development Status :: 4 - Beta',

        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'Topic :: Software Development :: Libraries',
        'Topic :: Utilities',

        'License :: OSI Approved :: GNU Affero General Public License v3',

        'Programming Language :: Python :: 3',
    ],

    keywords='interval data-structure chtholly odt range',

    packages=find_packages(exclude=['contrib', 'docs', 'tests*']),

    # https://packaging.python.org/en/latest/requirements.html
    install_requires=[
        'ruamel.yaml>=0.17',
        'sympy>=1.1.1',
    ],
    python_requires='>=3.6',

    package_data={
        'tests': ['test_files/*.yml', '*.py'],
    },
    include_package_data=True,

    entry_points={
        'console_scripts': [
            'odtree=odtree.odtree:main',
        ],
    },
)
