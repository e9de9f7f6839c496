#!/usr/bin/env python

from setuptools import setup


VERSION = "0.1a1"

setup(
    name="iriref",
    version=VERSION,
    description="Strict parsing, normalization and resolution of IRIs (RFC 3987)",
    license="AGPL-3.0-or-later",
    packages=["_iriref", "iriref"],
    python_requires=">=3.10",
    install_requires=["typing_extensions; python_version < '3.11'"],
    extras_require={"test": ["pytest"]},
)
