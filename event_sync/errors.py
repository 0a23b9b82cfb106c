class EventSyncError(Exception):
    def __init__(self, code: str, message: str, exit_code: int = 1):
        self.code = code
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)

class TransportError(EventSyncError):
    def __init__(self, code: str, message: str):
        super().__init__(code, message, exit_code=3)

class AuthError(EventSyncError):
    def __init__(self, code: str, message: str):
        super().__init__(code, message, exit_code=4)

class DataError(EventSyncError):
    def __init__(self, code: str, message: str):
        super().__init__(code, message, exit_code=5)

class SerializationError(EventSyncError):
    def __init__(self, code: str, message: str):
        super().__init__(code, message, exit_code=6)

class MissingSourceIdError(DataError):
    def __init__(self, calendar_id: str, summary: str | None = None):
        self.calendar_id = calendar_id
        super().__init__(
            "MISSING_SOURCE_ID",
            f"Source event without id in calendar {calendar_id!r} (summary={summary!r})",
        )
