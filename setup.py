#!/usr/bin/env python3
"""
Setup configuration for GS1 DSCSA Decoder
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="gs1-dscsa-decoder",
    version="1.0.0",
    author="GS1 Decoder Team",
    author_email="",
    description="GS1 product identifier decoder and DSCSA scan workbench",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "docs", "scripts"]),
    py_modules=["app"],
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.5",
        "streamlit>=1.25",
        "pymongo>=4.0",
        "python-dateutil>=2.8",
        "httpx>=0.24",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gs1-decode=gs1_decoder.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Healthcare Industry",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
    ],
    keywords="gs1 barcode decoder pharmaceutical gtin dscsa healthcare",
)
