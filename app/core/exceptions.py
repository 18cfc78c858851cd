# =============================================================================
# Domain exceptions for the calendar and schedule core
# =============================================================================

class AcoError(Exception):
    """Base exception class for the scheduling core."""
    pass

class InvalidDateError(AcoError, ValueError):
    """Raised when a date string or year/month pair is not a valid calendar date."""
    pass

class ScheduleSaveError(AcoError):
    """Raised when a schedule upsert fails. Local edits are kept."""

    def __init__(self, member_id: str, message: str):
        super().__init__(f"Failed to save schedule for member {member_id}: {message}")
        self.member_id = member_id
        self.message = message
