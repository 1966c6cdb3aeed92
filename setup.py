#!/usr/bin/env python3
"""Setup script for callshape - shape bookkeeping and dispatch contexts for kernel calls."""

from setuptools import setup, find_packages
import os

# Read requirements
def read_requirements(filename):
    """Read requirements from file."""
    with open(filename) as f:
        return [line.strip() for line in f if line.strip() and not line.startswith('#')]

# Read README for long description
def read_readme():
    """Read README.md for long description."""
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, encoding='utf-8') as f:
            return f.read()
    return ""

setup(
    name="callshape",
    version="0.1.0",
    description="Shape algebra and call contexts for vectorized compute dispatch",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    license="Apache-2.0",

    # Package discovery
    packages=find_packages(include=['callshape', 'callshape.*']),

    # Dependencies
    install_requires=read_requirements('requirements.txt'),

    extras_require={
        'dev': read_requirements('requirements-dev.txt') if os.path.exists('requirements-dev.txt') else [],
    },

    # Python version requirement
    python_requires='>=3.8',

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: Apache Software License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Scientific/Engineering',
    ],
)
