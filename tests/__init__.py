"""
Test suite for almanac

Contains:
- tests/unit/          : Unit tests for individual modules
"""
