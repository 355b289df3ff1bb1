"""
Test suite

Contains:
- tests/unit/          : Unit tests for matrix, polynomial and contracts
"""
