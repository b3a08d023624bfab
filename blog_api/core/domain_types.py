"""Domain Types — identity types that replace bare integers across the codebase.

Invariants:
    - UserId and PostId wrap store-generated integers; never reassigned

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from typing import NewType


UserId = NewType("UserId", int)
PostId = NewType("PostId", int)

# Ids are stored as 32-bit INTEGER columns; anything outside this range cannot exist
MIN_STORE_ID = 1
MAX_STORE_ID = 2**31 - 1
