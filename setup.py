#!/usr/bin/env python3
"""
Setup configuration for the DUN / GS1 label toolkit
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="dun-labels",
    version="1.0.0",
    author="DUN Labels Team",
    author_email="",
    description="GTIN-14 validation, GS1-128 strings and printable DUN/QR label sheets",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "docs", "examples", "scripts"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.5",
        "pymongo>=4.0",
        "PyYAML>=6.0",
        "reportlab>=3.6",
        "streamlit>=1.30",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dun-labels=dun_labels.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Intended Audience :: Manufacturing",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Office/Business",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
    ],
    keywords="gs1 gtin-14 dun-14 barcode label logistics qrcode",
)
