"""
Service layer building blocks shared by the payments services.

Services never raise for an expected upstream failure: they log it and return
a failed ServiceResult that views turn into an HTTP response.
"""
import logging
from typing import Any, Dict, Optional


class BaseService:
    """
    Parent of every service. Gives each subclass a logger named after it.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def log_info(self, message: str, **context) -> None:
        """
        Log an info message.

        Args:
            message: The message to log
            **context: Identifiers (intent, customer, event ids) attached to the record
        """
        self.logger.info(message, extra={'context': context})

    def log_error(self, message: str, exception: Optional[Exception] = None, **context) -> None:
        """
        Log an error, with the traceback of ``exception`` when one is given.

        Args:
            message: The error message to log
            exception: Exception that caused the error
            **context: Identifiers attached to the record
        """
        self.logger.error(message, exc_info=exception, extra={'context': context})


class ServiceException(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ExternalServiceError(ServiceException):
    """An upstream API (Stripe) rejected or failed a call."""


class ServiceResult:
    """
    Outcome of a service call: either ``data`` or an ``error`` message with
    an ``error_code`` such as STRIPE_ERROR.
    """

    def __init__(self, success: bool, data: Optional[Any] = None,
                 error: Optional[str] = None, error_code: Optional[str] = None):
        self.success = success
        self.data = data
        self.error = error
        self.error_code = error_code

    @classmethod
    def ok(cls, data: Any = None) -> 'ServiceResult':
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_code: Optional[str] = None) -> 'ServiceResult':
        return cls(success=False, error=error, error_code=error_code)

    def unwrap(self) -> Any:
        """
        Return ``data``, or raise ExternalServiceError carrying the failure.

        Used where a failure should abort the surrounding work, such as a
        webhook handler chaining several Stripe calls.
        """
        if not self.success:
            raise ExternalServiceError(self.error, code=self.error_code)
        return self.data

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        if self.success:
            return f"<ServiceResult ok data={self.data!r}>"
        return f"<ServiceResult failed error={self.error!r} code={self.error_code}>"
