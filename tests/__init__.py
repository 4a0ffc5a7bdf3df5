"""
Test suite for multisend-settlement

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/fixtures/      : Table-driven settlement scenarios (JSON)
"""
