"""
This module configures the package for distribution and installation.
"""

from setuptools import setup, find_packages

setup(
    name="pyspiral",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=["pygame", "numpy", "pillow"],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "pyspiral = pyspiral.__main__:main",
        ]
    },
)
