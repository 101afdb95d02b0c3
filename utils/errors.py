# utils/errors.py


class StudentRecordsError(Exception):
    """Base class for errors raised by the record, credential and report services."""


class RecordNotFound(StudentRecordsError):
    def __init__(self, sr_no):
        super().__init__(f"Student not found: {sr_no}")
        self.sr_no = sr_no


class DuplicateSerial(StudentRecordsError):
    def __init__(self, sr_no):
        super().__init__(f"Serial number already registered: {sr_no}")
        self.sr_no = sr_no


class DuplicateUsername(StudentRecordsError):
    def __init__(self, username):
        super().__init__(f"Username already taken: {username}")
        self.username = username


class InvalidCredentials(StudentRecordsError):
    # Same message for unknown user and wrong password
    def __init__(self):
        super().__init__("Invalid credentials")


class StorageError(StudentRecordsError):
    """The database could not complete the operation."""
