#!/usr/bin/env python3
"""
Setup configuration for online-lyrics
Synced lyrics lookup with translation and romanization merging
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "requests>=2.31.0",
    "pyyaml>=6.0.1",
    "rich-click>=1.7.0",
    "tqdm>=4.66.1",
]

setup(
    name="online-lyrics",
    version="0.1.1",
    author="online-lyrics contributors",
    description="Find synced LRC lyrics online and merge translated or romanized lines",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
        ],
    },
    entry_points={
        "console_scripts": [
            "online-lyrics=online_lyrics.cli:cli",
        ],
    },
    keywords="lyrics lrc netease translation romaji cli",
)
