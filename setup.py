#!/usr/bin/env python3
"""Setup script for the Chocolatey to winget migration tool.
"""

from setuptools import find_packages, setup

# Read requirements from requirements.txt file
with open("requirements.txt") as f:
    requirements = f.read().splitlines()

# Remove any comments or blank lines from requirements
requirements = [line for line in requirements if line and not line.startswith("#")]

setup(
    name="choco-to-winget",
    version="0.1.0",
    description="Migrate installed Chocolatey packages to winget",
    packages=find_packages(include=["c2w", "c2w.*"]),
    include_package_data=True,
    python_requires=">=3.12,<4.0",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    license="MIT",
    entry_points={
        "console_scripts": [
            "c2w=c2w.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "Operating System :: Microsoft :: Windows",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
