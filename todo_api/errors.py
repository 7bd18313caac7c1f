"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``todo_api.main`` turns them into ``{"error": message}``
responses with the matching status code.
"""


class AppError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"


class AuthenticationError(AppError):
    status_code = 401
    message = "Invalid token"


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class ConflictError(AppError):
    status_code = 409
    message = "Conflict"


class InternalError(AppError):
    status_code = 500
    message = "Internal server error"
