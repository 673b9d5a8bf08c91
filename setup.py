"""
Setup script for the dotenvconfig package.
"""

from setuptools import setup, find_packages

setup(
    name="dotenvconfig",
    version="1.0.0",
    description="Profile-based .env configuration loading with environment variable precedence",
    author="dotenvconfig Team",
    packages=find_packages(include=["dotenvconfig", "dotenvconfig.*"]),
    python_requires=">=3.8",
    install_requires=[
        # Resolution reports
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0,<9",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dotenvconfig=dotenvconfig.config.environment_manager:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
