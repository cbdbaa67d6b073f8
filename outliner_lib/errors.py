"""
outliner_lib/errors.py: Exceptions raised while building or reading outlines.
"""


class OutlineError(Exception):
    """Base class for all outline extraction failures."""


class EmptyDocumentError(OutlineError):
    """The document has no pages or no text spans to analyze."""


class NoColumnsError(OutlineError):
    """No multi-line block was found to anchor the column layout."""


class OutlineFormatError(OutlineError, ValueError):
    """A plain-text outline or a level sequence is malformed."""

    def __init__(self, message, line_no=None, line=None):
        self.line_no, self.line = line_no, line
        if line_no is not None:
            message = f"line {line_no}: {message} ({line!r})"
        super().__init__(message)
