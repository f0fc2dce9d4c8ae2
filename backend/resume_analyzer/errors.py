"""
Error taxonomy for the analysis pipeline.

Every component reports failures with its own subclass of AnalysisError. The
category tells the caller whether the input was bad, a downstream service
failed, or the requested record does not exist.
"""

BAD_INPUT = "bad_input"
SERVICE_FAILURE = "service_failure"
NOT_FOUND = "not_found"


class AnalysisError(Exception):
    """Base class for every failure the pipeline can surface."""

    kind = "analysis_error"
    category = SERVICE_FAILURE
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.kind, "details": self.detail}


class ExtractionError(AnalysisError):
    """The document could not be parsed or contained no text."""
    kind = "extraction_error"
    category = BAD_INPUT
    status_code = 400


class AIServiceError(AnalysisError):
    """Network, timeout, auth or quota failure talking to the AI model."""
    kind = "ai_service_error"
    status_code = 502


class SchemaValidationError(AnalysisError):
    """The AI response was not usable JSON or had no rating."""
    kind = "schema_validation_error"
    status_code = 502


class PersistenceError(AnalysisError):
    kind = "persistence_error"
    status_code = 500


class NotFoundError(AnalysisError):
    kind = "not_found"
    category = NOT_FOUND
    status_code = 404


class AnalysisTimeoutError(AnalysisError):
    """The whole analysis exceeded its time budget and was cancelled."""
    kind = "analysis_timeout"
    status_code = 504


class InvalidUploadError(AnalysisError):
    """The upload metadata (e.g. file name) cannot be stored."""
    kind = "invalid_upload"
    category = BAD_INPUT
    status_code = 400
