#!/usr/bin/env python
import codecs
import os
import re

from setuptools import find_packages
from setuptools import setup


def read(*parts):
    path = os.path.join(os.path.dirname(__file__), *parts)
    with codecs.open(path, encoding='utf-8') as fobj:
        return fobj.read()


def find_version(*file_paths):
    version_file = read(*file_paths)
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                              version_file, re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


install_requires = [
    'docopt >= 0.6.1, < 1',
    'requests >= 2.26.0, < 3',
    'texttable >= 0.9.0, < 2',
    'distro >= 1.5.0, < 2',
    'docker[ssh] >= 6.1.0, < 8',
    'python-dotenv >= 0.13.0, < 2',
]


tests_require = [
    'ddt >= 1.2.2, < 2',
    'pytest >= 6',
]


extras_require = {
    'tests': tests_require,
}


setup(
    name='enterthematrix',
    version=find_version("enterthematrix", "__init__.py"),
    description='Open an interactive shell in a running server container',
    long_description=read('README.md'),
    long_description_content_type='text/markdown',
    license='Apache License 2.0',
    packages=find_packages(exclude=['tests.*', 'tests']),
    include_package_data=True,
    install_requires=install_requires,
    extras_require=extras_require,
    tests_require=tests_require,
    python_requires='>=3.7',
    entry_points={
        'console_scripts': ['enterthematrix=enterthematrix.cli.main:main'],
    },
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: POSIX',
        'Programming Language :: Python :: 3',
    ],
)
