class RequiredFieldException(Exception):
    """Raised when a document field is configured as required but the record has no value for it."""


class MalformedIdentifierException(Exception):
    """Raised when the record identifier in the 001 cannot be used to build a document id."""


class InvalidArgumentException(ValueError):
    """
    Raised when a helper is called in a way that can never be correct, e.g., passing both an
    inclusion and an exclusion set of subfield codes. This signals a bug in the calling code,
    not a problem with the MARC data.
    """
