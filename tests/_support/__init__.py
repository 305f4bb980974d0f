"""
Test support utilities for rowspine tests.

Record declarations and DDL shared by several test modules live here
rather than in ``conftest.py`` so tests can import the types directly.
"""
