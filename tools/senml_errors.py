"""
senml_errors.py - Error taxonomy for SenML pack resolution

Every error raised while decoding or resolving a pack derives from
SenMLError. Record-level errors carry the 0-based index of the offending
raw record; pack-level errors (version conflicts, decode failures) do not.

Usage:
    from senml_errors import SenMLError, MissingNameError

    try:
        records = parse_json(text)
    except MissingNameError as e:
        print(f"record {e.index} has no name")
    except SenMLError as e:
        print(f"rejected: {e}")
"""

from typing import Optional


class SenMLError(ValueError):
    """Base class for all SenML decode and resolution errors."""

    message = 'Invalid SenML'

    def __init__(self, index: Optional[int] = None, detail: Optional[str] = None):
        self.index = index
        self.detail = detail
        text = self.message
        if index is not None:
            text = f"{text} in record at index {index}"
        if detail:
            text = f"{text}: {detail}"
        super().__init__(text)


class InvalidJSONError(SenMLError):
    """Input text is not a JSON array of SenML record objects."""
    message = 'Invalid JSON'


class TooManyRecordsError(SenMLError):
    """Pack exceeds the configured record limit."""
    message = 'Too many records'


class MissingNameError(SenMLError):
    """Neither a base name nor a name is available for the record."""
    message = 'Missing name'


class InvalidNameError(SenMLError):
    """Concatenated name does not match the SenML name grammar."""
    message = 'Invalid name'


class InvalidTimeError(SenMLError):
    """Computed time value is NaN or infinite."""
    message = 'Invalid time'


class DifferentBaseVersionError(SenMLError):
    """A record declares a base version that conflicts with the pack's."""
    message = 'All records must have the same version number'


class InvalidVersionNumberError(SenMLError):
    """A base version of zero was supplied."""
    message = 'Positive version number required'


class MultipleValueKindsError(SenMLError):
    """More than one of v, vs, vb, vd is set on a record."""
    message = 'Only one kind of value per record'


class InvalidBinaryValueError(SenMLError):
    """The vd field is not valid URL-safe unpadded base64."""
    message = 'Invalid base64 value'
