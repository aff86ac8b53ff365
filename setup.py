"""
Setup script for withdots.
"""

from setuptools import setup, find_packages

setup(
    name="withdots",
    version="0.1.0",
    description="Give Python callables a catch-all *args/**kwargs parameter",
    author="withdots contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
)
