"""Domain errors raised by the repository and service layers.

Every error derives from ``DomainError`` and carries the HTTP status
code it is rendered with, so the API layer needs a single exception
handler for all of them. "Not found" is not an error: lookups return
``None`` (or ``False`` for removals) instead.
"""


class DomainError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateKeyError(DomainError):
    status_code = 409

    def __init__(self, username: str):
        super().__init__(f"User with username {username} already exists")
        self.username = username


class InvalidRangeError(DomainError):
    status_code = 400

    def __init__(self, param: str, value: int):
        super().__init__(f"{param} must be greater than or equal to 1, got {value}")
        self.param = param
        self.value = value


class InactiveSubjectError(DomainError):
    status_code = 500

    def __init__(self, username: str):
        super().__init__(f"User is inactive: '{username}'")
        self.username = username
