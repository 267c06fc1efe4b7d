"""
Test suite for boxgrid

Contains:
- tests/unit/          : Unit tests for individual modules
"""
