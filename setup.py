"""
Setup script for the Hollomon card trading client.
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="hollomon-client",
    version="1.0.0",
    author="Your Name",
    author_email="your.email@example.com",
    description="Client for the Hollomon line-protocol card trading server",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/hollomon-client",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main", "cli_play", "gui_play"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Topic :: Games/Entertainment",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.9",
    install_requires=[
        "PyQt6>=6.5.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "hollomon-cli=cli_play:main",
            "hollomon-gui=gui_play:main",
        ],
    },
)
