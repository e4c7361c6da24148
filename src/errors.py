"""
Error hierarchy for the reconciler.

The client is the only component that turns HTTP status codes into these
types. Controllers only ever branch on the exception class.
"""

from typing import Optional, Sequence


class ProviderError(Exception):
    """Base for all reconciler errors."""


class NotConfiguredError(ProviderError):
    """A resource was used before the provider was configured."""

    def __init__(self, message: str = ""):
        super().__init__(
            message
            or "The provider hasn't been configured before apply. "
            "Configure it with an API token before managing resources."
        )


class InvalidIdentifierError(ProviderError):
    """An import identifier could not be split into its components."""

    def __init__(self, value: str, formats: Sequence[str]):
        self.value = value
        self.formats = tuple(formats)
        accepted = " or ".join(f'"{f}"' for f in self.formats)
        super().__init__(
            f"Invalid id '{value}' specified. should be in format {accepted}"
        )


class RemoteError(ProviderError):
    """The remote call failed without an HTTP response (transport failure)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class APIError(RemoteError):
    """The remote API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message, status_code=status_code)

    def __str__(self) -> str:
        if self.code:
            return f"{self.code} - {self.message} (status {self.status_code})"
        return f"{self.message} (status {self.status_code})"


class NotFoundError(APIError):
    """The remote API answered 404."""


class CanceledError(ProviderError):
    """The call did not finish before its deadline."""

    def __init__(self, message: str, timeout: Optional[float] = None):
        self.timeout = timeout
        super().__init__(message)


class ResourceError(ProviderError):
    """
    A lifecycle operation failed.

    Carries a short summary and a detail naming the resource and the
    underlying error, which is also chained as ``__cause__``.
    """

    def __init__(self, summary: str, detail: str):
        self.summary = summary
        self.detail = detail
        super().__init__(f"{summary}: {detail}")

    @property
    def status_code(self) -> Optional[int]:
        return getattr(self.__cause__, "status_code", None)
