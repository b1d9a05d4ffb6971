#!/usr/bin/env python3

import pathlib

from setuptools import find_packages, setup

HERE = pathlib.Path(__file__).parent

try:
    README = (HERE / "README.md").read_text()
except FileNotFoundError:
    README = "Exploit-mitigation checker for PE binaries using pefile, radare2 and PDBs"

setup(
    name="r2skim",
    version="1.0.0",
    description="Exploit-mitigation checker for PE binaries using pefile, radare2 and PDBs",
    long_description=README,
    long_description_content_type="text/markdown",
    author="Marc Rivero",
    author_email="mriverolopez@gmail.com",
    url="https://github.com/seifreed/r2skim",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Information Technology",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.13",
        "Topic :: Security",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.10",
    install_requires=[
        "r2pipe>=1.8.0",
        "pyfiglet>=0.8.post1",
        "pefile>=2023.2.7",
        "rich>=13.7.0",
        "click>=8.1.7",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "r2skim=r2skim.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
