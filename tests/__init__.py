"""
Test suite for rational-polyfactor

Contains:
- tests/unit/          : Unit tests for arithmetic, domain, parsing, algebra and contracts
"""
