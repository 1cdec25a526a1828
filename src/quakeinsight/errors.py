from typing import Optional


class QuakeInsightError(Exception):
    """Error surfaced to HTTP clients as {"error": message}."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequest(QuakeInsightError):
    status_code = 400


class UsgsError(QuakeInsightError):
    pass


class SmsError(QuakeInsightError):
    pass
