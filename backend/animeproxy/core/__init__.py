"""Core — pure domain logic: types, errors, sanitizing, body inspection.

Invariants:
    - No IO, no framework imports (FastAPI/httpx stay in the shell)

Design Decisions:
    - Core functions are plain and synchronous; async lives in infrastructure/
"""
