#!/usr/bin/env python
# encoding: utf-8

"""Packaging script."""

import os

from setuptools import setup

here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, "README.rst"), encoding="utf-8") as readme_file:
    readme = readme_file.read()


setup(
    name="mocksmith",
    version="0.1",
    author="mocksmith developers",
    description="libclang based mock generator for googletest",
    license="MIT",
    keywords="libclang mock generator googletest gmock",
    packages=["mocksmith"],
    entry_points={"console_scripts": ["mocksmith=mocksmith.cli:main"]},
    long_description=readme,
    long_description_content_type="text/x-rst",
    python_requires=">=3.8",
    install_requires=["click>=7.0", "libclang>=16.0"],
    extras_require={"test": ["pytest"]},
    test_suite="tests",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Environment :: Console",
        "Natural Language :: English",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Software Development :: Testing :: Mocking",
        "Topic :: Utilities",
        "Intended Audience :: Developers",
    ],
)
