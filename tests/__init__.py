"""
Test suite for the carpet pricing engine.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_price_calculator.py -v
"""
