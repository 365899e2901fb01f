"""
Type definitions used across layers
"""

from enum import StrEnum

# Marker contained in the host id of a game started without an account
GUEST_MARKER = "guest"


class ErrorKind(StrEnum):
    PERSISTENCE = "persistence"
    ENCODING = "encoding"
    NOT_FOUND = "not found"


class AccountType(StrEnum):
    GOOGLE = "google"
    APPLE = "apple"
    EMAIL = "email"
    GUEST = "guest"
