"""
Portal Errors
=============

Every error raised by the data layer carries a message that can be shown to
the learner as-is.
"""

from typing import Optional


class PortalError(Exception):
    pass


class NotConfiguredError(PortalError):
    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"The {entity} location is not configured. Please contact your teacher.")


class AccessDeniedError(PortalError):
    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(
            f"Could not access the {entity} sheet. "
            "Make sure it is shared with 'Anyone with the link' as a viewer."
        )


class NetworkFailureError(PortalError):
    def __init__(self, entity: str, status_code: Optional[int] = None):
        self.entity = entity
        self.status_code = status_code
        super().__init__(f"Failed to load {entity} data. Network error or wrong link.")


class UnknownCodeError(PortalError):
    def __init__(self, code: str = ""):
        self.code = code
        if code:
            message = "The code is not correct, please contact your teacher."
        else:
            message = "Please enter your code."
        super().__init__(message)


class SubmissionDeliveryError(PortalError):
    def __init__(self):
        super().__init__("Failed to send the quiz result. Please try again.")


class QuizStateError(PortalError):
    pass
