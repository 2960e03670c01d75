import os

from setuptools import find_packages, setup

setup(
    name="tessera",
    version="0.1.0",
    packages=find_packages(include=["tessera", "tessera.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.10.6,<3.0.0",
        "hypothesis>=6.0",
        "tzdata",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    author="Tessera Contributors",
    description="Composable, immutable type definitions with decoding, validation and encoding",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
)
