from typing import Literal

PipelineErrorCode = Literal["NOT_FOUND", "INVALID_STATUS", "SEARCH_FAILED", "VERIFY_FAILED"]


class PipelineError(Exception):
    """Fatal or collaborator failure of a recommendation run.

    NOT_FOUND and INVALID_STATUS are final. SEARCH_FAILED and VERIFY_FAILED
    wrap a collaborator exception (chained as __cause__) and are safe for
    the caller to retry: persistence replaces rows per request.
    """

    def __init__(self, code: PipelineErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"
