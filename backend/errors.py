"""Error taxonomy shared by services and controllers.

Each error carries the HTTP status and a stable machine code; the handler
registered in ``main.create_app`` turns them into ``{"detail", "code"}`` JSON.
"""


class DropError(Exception):
    status_code = 500
    code = "ERROR"
    detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotFoundError(DropError):
    status_code = 404
    code = "NOT_FOUND"
    detail = "File not found"


class ExpiredError(DropError):
    status_code = 410
    code = "EXPIRED"
    detail = "This link has expired"


class ExhaustedError(DropError):
    status_code = 410
    code = "EXHAUSTED"
    detail = "Download limit reached"


class BadPasswordError(DropError):
    status_code = 401
    code = "BAD_PASSWORD"
    detail = "Incorrect password"


class PasswordRequiredError(DropError):
    status_code = 401
    code = "PASSWORD_REQUIRED"
    detail = "Password required"


class AuthenticationError(DropError):
    status_code = 401
    code = "UNAUTHENTICATED"
    detail = "Not authenticated"


class ForbiddenError(DropError):
    status_code = 403
    code = "FORBIDDEN"
    detail = "Access denied"


class ValidationError(DropError):
    status_code = 400
    code = "VALIDATION"
    detail = "Invalid request"


class StorageIOError(DropError):
    status_code = 500
    code = "STORAGE_IO"
    detail = "Storage error"
