"""Exception hierarchy for tally."""


class TallyError(Exception):
    """Base class for all tally errors."""


class ValidationError(TallyError):
    """A transaction field is missing or malformed."""


class PersistenceCorruption(TallyError):
    """Stored ledger state is missing or cannot be decoded."""


class ImportFormatError(TallyError):
    """Imported data is not a well-formed array of transactions."""


class StorageError(TallyError):
    """The key-value backend failed to read or write."""
