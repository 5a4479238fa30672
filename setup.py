# SPDX-FileCopyrightText: 2025 lagrange-secret contributors
# SPDX-License-Identifier: MIT

from setuptools import find_packages, setup

setup(
    name="lagrange-secret",
    version="0.1.0",
    description="Exact Lagrange reconstruction of Shamir-shared secrets",
    author="lagrange-secret contributors",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "click<9.0,>=8.1",
        "PyYAML<7.0,>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-cov>=5.0.0",
            "hypothesis>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "lagrange-secret=lagrange_secret.cli:main",
        ],
    },
)
