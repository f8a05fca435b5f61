"""
Job Folders setup.py — Package configuration and CLI entry point.
"""

from setuptools import find_packages, setup

setup(
    name="jobfolders",
    version="1.0.0",
    description="Job Folders — hierarchical job folder records with a tagged binary encoding",
    packages=find_packages(include=["jobfolders", "jobfolders.*"]),
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "jobfolders=jobfolders.cli:main",
        ],
    },
    install_requires=[
        "pydantic>=2.5",
        "bcrypt>=4.1",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
)
