"""
# utilkit Technical Documentation

utilkit is a small collection of general-purpose primitives for systems-style
Python code. These docs are generated from the project's docstrings and serve
as a technical reference for developers.

---

## Purpose

utilkit provides the building blocks for:
- Fixed-size, multi-dimensional buffers with bounds-checked indexing.
- Bit manipulation over fixed-width unsigned words.
- String trimming, case conversion, splitting and typed conversions.
- Minimal filesystem queries.
- Managing configuration and structured logging across modules.

---

## How to Use This Documentation

- Browse the **modules** listed in the sidebar to explore available APIs.
- Each class and function includes argument and return value details.
- Private helpers (`_method`, `_Class`) are minimally documented.
"""

from importlib.metadata import version

__version__ = version("utilkit")
