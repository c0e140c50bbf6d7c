"""
Exceptions for the filing engine and its reference data.

Validation problems with user data are never raised; they come back as
ValidationOutcome objects. These exceptions cover reference data and
lookups only.
"""


class FilingEngineError(Exception):
    """Base exception for filing engine operations."""
    pass


class ReferenceDataError(FilingEngineError):
    """Portal or document type data could not be loaded."""
    pass


class UnknownPortalError(FilingEngineError):
    """No e-filing portal is known for the requested state."""

    def __init__(self, state: str):
        self.state = state
        super().__init__(f"No e-filing portal for state: {state}")


class UnknownDocumentTypeError(FilingEngineError):
    """No document type with the requested id exists in the catalog."""

    def __init__(self, doc_type_id: str):
        self.doc_type_id = doc_type_id
        super().__init__(f"Unknown document type: {doc_type_id}")


class UnknownRegistrationGuideError(FilingEngineError):
    """No registration guide is published for the requested state or portal."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No registration guide for: {key}")
