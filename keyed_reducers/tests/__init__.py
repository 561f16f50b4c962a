"""
Test suite for keyed reducer composition.

Focus areas:
- Reference equality when nothing changed
- Structural sharing of untouched slices
- Fail-fast shape validation
- Undefined state detection
"""
