# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.

from setuptools import setup, find_packages
import sys
import version

LATEST = [
    "requests >= 2.9.1",
    "certifi >= 2015.11.20.1",
]

if sys.platform.startswith("linux"):
    REQUIRES = [
        # no bundled certifi as distro packages are expected to be patched to use system ca certs
        "requests >= 2.2.1",
    ]
elif sys.platform == "darwin":
    REQUIRES = LATEST
elif sys.platform.startswith("win"):
    REQUIRES = LATEST
else:
    # default to latest version on unknown platforms
    REQUIRES = LATEST

REQUIRES = REQUIRES + [
    "pyperclip >= 1.8.0",
    "termcolor >= 1.1.0",
    "tqdm >= 4.40.0",
]

setup(
    author="Hisbaan Noorani",
    entry_points={
        "console_scripts": [
            "dym = didyoumean.__main__:main",
        ],
    },
    install_requires=REQUIRES,
    extras_require={
        "completion": ["argcomplete"],
        "test": ["pytest"],
    },
    license="Apache 2.0",
    name="didyoumean",
    packages=find_packages(exclude=["tests"]),
    platforms=["POSIX", "MacOS", "Windows"],
    description="Suggest the word you meant from a misspelled one",
    long_description=open("README.rst").read(),
    url="https://github.com/hisbaan/didyoumean",
    version=version.get_project_version("didyoumean/version.py"),
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Text Processing :: Linguistic",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
