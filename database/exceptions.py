class StoreError(Exception):
    """Base exception for onboarding store errors."""
    pass

class StoreUnavailableError(StoreError, ConnectionError):
    """Raised when the database cannot be reached or a statement fails."""
    pass

class StoreConflictError(StoreError):
    """Raised when a conditional update keeps losing to concurrent writers."""
    pass
