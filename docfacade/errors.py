class DocFacadeError(Exception):
    """Base exception for docfacade errors."""


class InvalidArgumentError(DocFacadeError, ValueError):
    """An argument or option could not be turned into an operation."""


class UnsupportedOperationError(DocFacadeError):
    """The executor does not know how to run the submitted operation."""
