class GrahmeenHealthError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthenticatedError(GrahmeenHealthError):
    status_code = 401


class NotFoundError(GrahmeenHealthError):
    status_code = 404


class ValidationError(GrahmeenHealthError):
    status_code = 400


class InternalError(GrahmeenHealthError):
    status_code = 500
