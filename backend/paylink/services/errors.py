"""
Client-facing errors raised while validating a payment submission.

Every subclass carries a human-readable ``message`` (returned to the client
as ``{"error": message}`` with status 400) and a stable ``error_code`` used
in logs.
"""


class SubmissionError(Exception):
    """Base class for submission problems the client can fix."""
    def __init__(self, message: str, error_code: str):
        super().__init__(message)
        self.error_code = error_code
        self.message = message


# ---------------------------------------------------------------------------
# Text fields / link identifier
# ---------------------------------------------------------------------------

class ValidationError(SubmissionError):
    pass


class InvalidLink(ValidationError):
    def __init__(self, message: str = "Link inválido!"):
        super().__init__(message, "invalid_link")


class IncompleteData(ValidationError):
    def __init__(self, message: str = "Dados incompletos!"):
        super().__init__(message, "incomplete_data")


# ---------------------------------------------------------------------------
# Uploaded images
# ---------------------------------------------------------------------------

class UploadError(SubmissionError):
    pass


class UnsupportedMediaType(UploadError):
    def __init__(self, message: str = "Apenas imagens são permitidas!"):
        super().__init__(message, "unsupported_media_type")


class PayloadTooLarge(UploadError):
    def __init__(self, message: str = "A imagem excede o limite de 5 MB."):
        super().__init__(message, "payload_too_large")


class MissingOrDuplicateField(UploadError):
    def __init__(self, message: str):
        super().__init__(message, "missing_or_duplicate_field")


class UnexpectedFileField(UploadError):
    def __init__(self, message: str):
        super().__init__(message, "unexpected_file_field")
