"""Infrastructure — upstream HTTP client and logging setup.

Invariants:
    - Every external call goes through infrastructure/ (never from core/)
"""
