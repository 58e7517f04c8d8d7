"""
Errors raised by the ledger engine and the document services.

Every error carries the HTTP status the API layer reports it
with. Services raise them; the API maps them to HTTPException.
"""


class LedgerError(Exception):
    """Base class for all errors the engine reports to a caller."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """A required field is missing or a posting would be malformed."""

    status_code = 400


class NotFoundError(LedgerError):
    """A referenced document, vendor, product or account is absent."""

    status_code = 404


class ConflictError(LedgerError):
    """The write would break a uniqueness rule (e.g. invoice number)."""

    status_code = 409


class StoreError(LedgerError):
    """
    The database failed inside an atomic scope.

    The scope has already been rolled back when this is raised.
    The message is generic; the original error is
    chained as __cause__ and logged where it was caught.
    """

    status_code = 500
