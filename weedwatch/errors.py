"""Error types raised by the request handlers.

Every error is rendered to the client as ``{"error": <message>}`` with the
status code carried by the exception; no finer-grained error codes exist.
"""


class APIError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self):
        return {"error": self.message}


class ValidationError(APIError):
    status_code = 400
    default_message = "Invalid request"


class AuthError(APIError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidCredentials(AuthError):
    # same status and body for unknown email and wrong password
    status_code = 400
    default_message = "Invalid credentials"


class Conflict(APIError):
    status_code = 400
    default_message = "Email already exists"


class NotFound(APIError):
    status_code = 404
    default_message = "Not found"


class UpstreamError(APIError):
    status_code = 500
    default_message = "Upstream service error"


class PersistenceError(APIError):
    status_code = 500
    default_message = "Database error"
