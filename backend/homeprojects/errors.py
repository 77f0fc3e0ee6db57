# backend/homeprojects/errors.py
"""
Error taxonomy shared by the services and the HTTP layer.

- ValidationError 系 → 400（メッセージはそのまま返してよい）
- NotFoundError → 404
- StoreError / NormalizationError / ArchiveError → 500（詳細はログのみ）
"""


class HomeProjectsError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(HomeProjectsError):
    status_code = 400
    message = "Invalid request"


class MissingFileError(ValidationError):
    message = "No file uploaded"


class UnsupportedMediaError(ValidationError):
    message = "Invalid file type. Only images are allowed."


class PayloadTooLargeError(ValidationError):
    message = "File too large"


class NotFoundError(HomeProjectsError):
    status_code = 404
    message = "Not found"


class StoreError(HomeProjectsError):
    message = "Storage failure"


class NormalizationError(HomeProjectsError):
    message = "Failed to process image"


class ArchiveError(HomeProjectsError):
    message = "Failed to create zip"
