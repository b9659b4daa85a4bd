"""Exceptions raised by the analysis service client."""


class AnalysisServiceError(Exception):
    """The analysis service failed or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class AnalysisServiceNotFound(AnalysisServiceError):
    """The analysis service has no record of the requested resource."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)
