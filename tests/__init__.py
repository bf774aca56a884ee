"""
Test suite for fxmath

Contains:
- tests/unit/          : Unit tests for individual modules
"""
