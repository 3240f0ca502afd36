"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Slug generation
MAX_SLUG_LENGTH = 63

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_SERIAL_NUMBER_LENGTH = 100
MAX_STATUS_LENGTH = 50
MAX_STRIPE_ID_LENGTH = 255

# Password requirements
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 128
BCRYPT_ROUNDS = 10  # ~100ms per hash on commodity hardware

# Plan limits
UNLIMITED = -1

# Analytics
TIMELINE_DAYS = 7
UNKNOWN_ASSET_NAME = "Unknown"

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"
