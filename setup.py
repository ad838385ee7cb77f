#!/usr/bin/env python3
"""
DualStream setup script
"""

import os
from setuptools import setup, find_packages

# Read the contents of README.md
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="dualstream",
    version="0.1.0",
    description="Tee text output to two streams with optional line timestamps",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="DualStream Team",
    author_email="dualstream@example.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "colorama>=0.4.6,<0.5",
        "pyyaml>=6.0.1,<7",
        "click>=8.1.7,<9",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0,<8",
            "pytest-cov>=4.1.0,<5",
            "black>=23.7.0,<24",
            "isort>=5.12.0,<6",
            "mypy>=1.5.1,<2",
            "flake8>=6.1.0,<7",
            "pre-commit>=4.2.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dualstream=dualstream.main:run_dualstream",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Topic :: System :: Logging",
        "Topic :: Utilities",
    ],
    python_requires=">=3.10",
    keywords=[
        "tee",
        "stream",
        "stdout",
        "logging",
        "timestamp",
    ],
    include_package_data=True,
)
