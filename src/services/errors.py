"""User-facing error taxonomy for menu analysis.

Every failure inside the analysis pipeline is re-raised as exactly one of
these, carrying a stable message the UI can show as-is and the HTTP status
the web layer answers with.
"""


class MenuAnalysisError(Exception):
    """Base class for classified analysis failures."""

    default_message = "Failed to analyze menu. Please try again."
    status_code = 500

    def __init__(self, message: str = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingImageError(MenuAnalysisError):
    default_message = "Please upload a menu image first!"
    status_code = 400


class EncodingError(MenuAnalysisError):
    default_message = "Failed to read the menu image. Please try another file."
    status_code = 400


class AuthError(MenuAnalysisError):
    default_message = "Invalid API key. Please check your .env file."
    status_code = 401


class RateLimitExceededError(MenuAnalysisError):
    default_message = "Rate limit reached. Please wait 60 seconds and try again."
    status_code = 429


class ParseError(MenuAnalysisError):
    default_message = "Failed to parse AI response. Please try again."
    status_code = 502


class UnknownError(MenuAnalysisError):
    status_code = 500

    def __init__(self, detail: str = None) -> None:
        self.detail = detail
        super().__init__(f"Analysis failed: {detail or 'Unknown error'}")
