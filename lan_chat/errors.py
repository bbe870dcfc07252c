class SyncError(Exception):
    """Base class for every failure the sync engine converts to a status."""


class NetworkError(SyncError):
    pass


class ServerError(SyncError):
    def __init__(self, status: int, detail: str = ""):
        self.status = status
        self.detail = detail
        message = f"Server error: {status}"
        if detail:
            message = f"{message}. {detail[:200]}"
        super().__init__(message)


class ValidationError(SyncError):
    pass


class PreconditionError(SyncError):
    def __init__(self, missing: str = "username"):
        self.missing = missing
        super().__init__(f"Missing {missing}.")

    @property
    def missing_username(self) -> bool:
        return self.missing == "username"
