"""
Exception Hierarchy

Custom exceptions for the feedback portal.
"""


class FeedbackPortalException(Exception):
    """Base exception for the feedback portal"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Submission Exceptions (surfaced to callers of the pipeline)
class SubmissionError(FeedbackPortalException):
    """Exception when a feedback submission cannot be completed"""
    pass


class MissingIdentity(SubmissionError):
    """Exception when the submitting student is not resolved"""

    def __init__(self, message: str = "Student information not found", details: dict = None):
        super().__init__(message, details)


class MissingFields(SubmissionError):
    """Exception when a required field is absent or blank"""

    def __init__(self, message: str = "Please fill in all required fields", details: dict = None):
        super().__init__(message, details)


class PersistenceFailed(SubmissionError):
    """Exception when the record store did not accept the record"""

    def __init__(self, message: str = "Failed to submit feedback. Please try again.", details: dict = None):
        super().__init__(message, details)


# Collaborator Exceptions
class ClassifierError(FeedbackPortalException):
    """Exception when the remote sentiment classifier fails"""
    pass


class RecordStoreError(FeedbackPortalException):
    """Exception when the record store rejects or cannot reach a record"""
    pass


# Request Validation Exceptions
class ValidationError(FeedbackPortalException):
    """Exception when a request value is outside the allowed set"""
    pass
