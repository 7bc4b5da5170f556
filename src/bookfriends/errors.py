class BookFriendsError(Exception):
    """Base class for errors reported to the journal's callers."""


class CodeGenerationError(BookFriendsError):
    def __init__(self, attempts: int):
        super().__init__(f"No free group code found after {attempts} attempts")
        self.attempts = attempts


class ValidationFailed(BookFriendsError):
    pass


class GroupNotFound(BookFriendsError):
    def __init__(self, code: str):
        super().__init__(f"No group with code {code!r}")
        self.code = code


class NotJoined(BookFriendsError):
    def __init__(self, code: str):
        super().__init__(f"Group {code!r} has not been joined on this device")
        self.code = code


class NoActiveSession(BookFriendsError):
    def __init__(self):
        super().__init__("No active group; create or join one first")


class NotRecordAuthor(BookFriendsError):
    def __init__(self, record_id: str):
        super().__init__(f"Only the author can delete record {record_id}")
        self.record_id = record_id
