"""
Application Constants
Defines constant values used throughout the application.
"""

from uuid import UUID

# Pagination for subscription listing
DEFAULT_LIST_LIMIT = 50  # Used when limit is absent or not positive
DEFAULT_LIST_OFFSET = 0

# The all-zero UUID is never a valid identifier
NIL_UUID = UUID(int=0)
