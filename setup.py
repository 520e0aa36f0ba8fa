"""
Setup configuration for Varsha package
Enables installation and proper module importing
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="varsha",
    version="1.0.0",
    author="Varsha Development Team",
    description="Rooftop Rainwater Harvesting & Artificial Recharge Assessment for India",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["varsha_core", "varsha_core.*"]),
    package_data={
        "varsha_core": ["data/*.json"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Hydrology",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "openpyxl>=3.1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "varsha=varsha_core.__main__:main",
        ],
    },
)
