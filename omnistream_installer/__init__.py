"""OmniStream host installer for Debian 13 (trixie).

Core design goals:
- Strictly linear, one step at a time
- Idempotent steps, resumable from the last completed one
- Every external command logged to a single append-only file
- Progress reported through a reporter, never drawn by the steps
"""

__all__ = []
