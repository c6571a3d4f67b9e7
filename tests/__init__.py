"""
Test suite for polyclob

Contains:
- tests/unit/  : Unit tests for individual modules
- tests/fakes.py : Test doubles for signer, market data and transport
"""
