#!/bin/env python
import os

import setuptools


with open(os.path.join("pyargscan", "__init__.py"), "r") as f:
    for line in f:
        if line.startswith("__version__"):
            version = line.split("=")[-1].strip().strip('"')
            break

with open("README.md", "r") as fh:
    long_description = fh.read()


install_reqs = [
    "rich",
    "toml",
    "traitlets >= 5.0",
]


setuptools.setup(
    name="pyargscan",
    version=version,
    provides=["pyargscan"],
    description="Incremental command line option and argument scanner",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["pyargscan.tests"]),
    python_requires=">=3.8",
    include_package_data=True,
    install_requires=install_reqs,
    extras_require={"test": ["pytest"], "develop": ["bumpversion"]},
    entry_points={
        "console_scripts": [
            "argscan-dump = pyargscan.scripts.argscan_dump:main",
            "argscan-profile = pyargscan.scripts.argscan_profile:main",
        ],
    },
    zip_safe=False,
    tests_require=["pytest"],
    license="LGPLv3+",
    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        # How mature is this project? Common values are
        #   3 - Alpha
        #   4 - Beta
        #   5 - Production/Stable
        "Development Status :: 4 - Beta",
        # Indicate who your project is intended for
        "Intended Audience :: Developers",
        "Topic :: Software Development",
        "Topic :: Software Development :: User Interfaces",
        # Pick your license as you wish (should match "license" above)
        "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
