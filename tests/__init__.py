"""
ZK Jobs Test Suite
==================

Test organization:
- tests/unit/          - Unit tests for the zkjobs library
- tests/services/      - In-process HTTP tests of each service
- tests/integration/   - Full post/prove/apply flows

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=zkjobs             # With coverage
"""
