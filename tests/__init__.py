"""
fragql Test Suite.

This package contains:
- unit/: Unit tests (no external services)
- integration/: Blog schema end to end and the HTTP API
"""
