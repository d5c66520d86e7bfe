#!/usr/bin/env python3
"""
setup.py compatibility wrapper for traditional packaging tools.

This project uses pyproject.toml with hatchling as the build backend.
For normal Python installation, use:
    pip install .
"""

from setuptools import setup

setup()
