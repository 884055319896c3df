class FetchError(Exception):
    """Raised when a remote dataset cannot be retrieved or decoded."""


class FetchTimeoutError(FetchError):
    pass


class FetchNotFoundError(FetchError):
    pass


class FetchServerError(FetchError):
    pass


class DataValidationError(ValueError):
    """Raised when a dataset or derived view breaks a structural contract."""
