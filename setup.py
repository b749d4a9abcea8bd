"""Brood setup - replication and fleet control for self-funding agents."""
from setuptools import setup, find_packages

setup(
    name="brood",
    version="0.1.0",
    description="Brood: replication strategy and child fleet evaluation",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "blake3>=0.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "brood=brood.cli.main:cli",
        ],
    },
)
