import os

from setuptools import find_packages, setup

VERSION = '1.0.0'


def parse_md_readme():
    """
    read the long description from the readme, empty if the readme cannot be read
    """
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'README.md')) as fh:
            return fh.read()
    except OSError:
        return ''


TEST_REQS = [
    'coverage>=4.2',
    'pycodestyle>=2.3.1',
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = [
    'braceexpand>=0.1.2',
    'shortuuid>=0.5.0',
]

DEPLOY_REQS = ['twine', 'wheel']


setup(
    name='genemerge',
    version='{}'.format(VERSION),
    packages=find_packages(exclude=['tests', 'tests.*']),
    description='Merges the gene models of a curated and an automatic annotation source',
    long_description=parse_md_readme(),
    long_description_content_type='text/markdown',
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS + DEPLOY_REQS,
        'deploy': DEPLOY_REQS,
    },
    tests_require=TEST_REQS,
    python_requires='>=3.6',
    test_suite='tests',
    entry_points={
        'console_scripts': [
            'genemerge = genemerge.main:main',
        ]
    },
)
