"""Application-wide constants for the Studiobook calendar."""

from __future__ import annotations

BRAND_NAME = "Studiobook"
API_VERSION = "1.0.0"

# Slot grid
SLOT_MINUTES = 30

# Day of week mapping (index 0 = Sunday, matching the photographer calendar)
WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

# Forward projection horizons offered to photographers (months)
DEFAULT_HORIZON_CHOICES = [1, 2, 3, 6, 12]
DEFAULT_HORIZON_MONTHS = 3

# Session statuses that never show up on the calendar
EXCLUDED_SESSION_STATUSES = frozenset({"canceled"})

# Whole-map persistence notices
AVAILABILITY_UPDATED_NOTICE = "Your availability was updated successfully"
AVAILABILITY_UPDATE_FAILED_NOTICE = "Could not update your availability"
