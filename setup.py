# SPDX-License-Identifier: FSFAP
# Copyright (C) 2025-2026 Chukwuemeka Obi
# Copyright (C) 2026 Adaeze Nwankwo
#
# Copying and distribution of this file, with or without modification,
# are permitted in any medium without royalty provided the copyright
# notice and this notice are preserved.  This file is offered as-is,
# without any warranty.

import os
import re
from setuptools import setup, find_packages

# This directory
dir_setup = os.path.dirname(os.path.realpath(__file__))

with open(os.path.join(dir_setup, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

with open(os.path.join(dir_setup, "docxreview", "common.py")) as f:
    __version__ = re.search(r'^__version__ = "(.+)"', f.read(), re.M).group(1)

install_requires = [
    "arrow>=1.1.1",
    "platformdirs>=3.0",
    "pydantic>=2.0",
    "requests",
    "requests-toolbelt",
    "stdiomask>=0.0.6",
    'tomli>=2.0.1 ; python_version<"3.11"',
    "tomlkit>=0.11.4",
    "urllib3>=1.26",
]

setup(
    name="docxreview",
    version=__version__,
    description="Review and apply degree-class imports from DOCX documents",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Chukwuemeka Obi",
    license="AGPLv3+",
    python_requires=">=3.10",
    packages=find_packages(),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: GNU Affero General Public License v3 or later (AGPLv3+)",
        "Development Status :: 3 - Alpha",
        "Operating System :: OS Independent",
        "Topic :: Education",
    ],
    entry_points={
        "console_scripts": [
            "docxreview=docxreview.cli.__main__:main",
        ],
    },
    install_requires=install_requires,
    extras_require={
        "test": ["pytest"],
    },
)
