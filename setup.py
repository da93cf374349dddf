"""Build configuration for httpgrammar."""
from setuptools import find_packages, setup

setup(
    name="httpgrammar",
    version="0.1.0",
    description="Grammar-based parser for HTTP/1.1 request lines and headers",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.1",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "httpgrammar = httpgrammar.cli:main",
        ],
    },
)
