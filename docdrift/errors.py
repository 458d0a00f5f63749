"""
Exception types raised by Doc-Drift.

The comparison core itself never raises for well-typed inputs; these cover
the edges: reading documents, validating them and executing resolutions.
"""


class DocDriftError(Exception):
    """Base class for all Doc-Drift errors."""


class DocumentFormatError(DocDriftError, ValueError):
    """A document could not be decoded from its JSON representation."""


class DocumentValidationError(DocDriftError, ValueError):
    """
    A document failed content validation.

    Attributes:
        errors: Every rule violation found, in check order
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Document validation failed:\n" + "\n".join(self.errors))


class ResolutionError(DocDriftError):
    """A drift resolution is missing what its action requires."""
