from __future__ import annotations

from typing import Optional


class GigError(Exception):
    """Base for every failure a GigClient operation can report.

    `code` is stable and meant for callers to branch on; `message` is the
    human-readable diagnostic that was logged.
    """

    code = "gig_error"

    def __init__(self, op: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.op = op
        self.message = message
        self.status_code = status_code


class SignUpFailed(GigError):
    code = "sign_up_failed"


class SignInFailed(GigError):
    code = "sign_in_failed"


class NoData(GigError):
    code = "no_data"


class NotSignedIn(GigError):
    code = "not_signed_in"


class FailedFetch(GigError):
    code = "failed_fetch"


class BadData(GigError):
    code = "bad_data"


class BadURL(BadData):
    # only raised by the legacy create request shape
    code = "bad_url"
