"""
Setup configuration for the overlap_merge package.
"""
from setuptools import setup, find_packages

# Get long description from README.md if it exists
try:
    with open("README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = "A package for merging overlapping atoms of small-molecule models into superatoms"

setup(
    name="overlap_merge",
    version="0.1.0",
    description="A package for merging overlapping atoms of small-molecule models into superatoms",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(),
    include_package_data=True,
    package_data={
        "overlap_merge": ["config/*.yaml", "config/*.json"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Chemistry",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.21",
        "networkx>=2.6",
        "pandas>=1.3",
        "typer>=0.9.0",
        "rich>=13.0.0",
        "joblib>=1.3.0,<2.0.0",
        "pyyaml>=6.0.0,<7.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0,<9.0.0",
            "pytest-cov>=2.12.0",
            "black>=22.1.0",
            "isort>=5.10.0",
            "pylint>=2.12.0",
            "mypy>=0.910",
        ],
    },
    entry_points={
        "console_scripts": [
            "overlap-merge=overlap_merge.cli:main"
        ]
    }
)
