"""
senml_value.py - SenML value kinds and value resolution

A SenML record carries at most one value, of one of four kinds:

    v   floating point number
    vs  string
    vb  boolean
    vd  binary data (URL-safe base64 on the wire)

SenMLValue is the tagged union of these four kinds. resolve_value() picks
the kind for a raw record and applies the base value.

Usage:
    from senml_value import SenMLValue, ValueKind

    value = SenMLValue.floating(23.1)
    value.kind           # ValueKind.FLOAT
    value.as_float()     # 23.1
    value.as_string()    # None
    value.to_field()     # ('v', 23.1)
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union

import senml_base64
from senml_errors import InvalidBinaryValueError, MultipleValueKindsError


class ValueKind(Enum):
    """Value kinds, keyed by their JSON field name."""
    FLOAT = 'v'
    STRING = 'vs'
    BOOLEAN = 'vb'
    DATA = 'vd'


PAYLOAD_TYPES = {
    ValueKind.FLOAT: float,
    ValueKind.STRING: str,
    ValueKind.BOOLEAN: bool,
    ValueKind.DATA: bytes,
}


@dataclass(frozen=True)
class SenMLValue:
    """One SenML value of exactly one kind."""
    kind: ValueKind
    value: Union[float, str, bool, bytes]

    def __post_init__(self):
        expected = PAYLOAD_TYPES[self.kind]
        if type(self.value) is not expected:
            raise TypeError(
                f"{self.kind.name} value must be {expected.__name__}, "
                f"got {type(self.value).__name__}"
            )

    @classmethod
    def floating(cls, value: float) -> 'SenMLValue':
        return cls(ValueKind.FLOAT, float(value))

    @classmethod
    def string(cls, value: str) -> 'SenMLValue':
        return cls(ValueKind.STRING, value)

    @classmethod
    def boolean(cls, value: bool) -> 'SenMLValue':
        return cls(ValueKind.BOOLEAN, value)

    @classmethod
    def data(cls, value: bytes) -> 'SenMLValue':
        return cls(ValueKind.DATA, bytes(value))

    def as_float(self) -> Optional[float]:
        return self.value if self.kind is ValueKind.FLOAT else None

    def as_string(self) -> Optional[str]:
        return self.value if self.kind is ValueKind.STRING else None

    def as_bool(self) -> Optional[bool]:
        return self.value if self.kind is ValueKind.BOOLEAN else None

    def as_data(self) -> Optional[bytes]:
        return self.value if self.kind is ValueKind.DATA else None

    def to_field(self) -> Tuple[str, Any]:
        """
        JSON key and JSON-ready value for this value.

        Integral floats are emitted as integers, non-finite floats as null.
        """
        key = self.kind.value
        if self.kind is ValueKind.FLOAT:
            return key, float_to_json(self.value)
        if self.kind is ValueKind.STRING:
            return key, self.value
        if self.kind is ValueKind.BOOLEAN:
            return key, self.value
        if self.kind is ValueKind.DATA:
            return key, senml_base64.encode(self.value)
        raise ValueError(f"Unknown value kind: {self.kind}")


def float_to_json(value: float) -> Union[int, float, None]:
    """Integral floats become ints so they serialize without '.0'."""
    if not math.isfinite(value):
        return None
    if value.is_integer():
        return int(value)
    return value


def resolve_value(record, base_value: Optional[float], index: int) -> Optional[SenMLValue]:
    """
    Resolve the value of a raw record.

    Precedence is v > vs > vb > vd. Once a kind is set, any lower kind
    being set too is an error. The base value only applies to v; with no
    own value at all the base value alone becomes the value.

    Args:
        record: Raw record (value, string_value, bool_value, data_value)
        base_value: Current base value, if any
        index: Record index, for error reporting

    Returns:
        The resolved value, or None if the record has no value.

    Raises:
        MultipleValueKindsError: more than one value kind is set
        InvalidBinaryValueError: vd is not valid URL-safe unpadded base64
    """
    if record.value is not None:
        if (record.string_value is not None or record.bool_value is not None
                or record.data_value is not None):
            raise MultipleValueKindsError(index)
        if base_value is not None:
            return SenMLValue.floating(base_value + record.value)
        return SenMLValue.floating(record.value)

    if record.string_value is not None:
        if record.bool_value is not None or record.data_value is not None:
            raise MultipleValueKindsError(index)
        return SenMLValue.string(record.string_value)

    if record.bool_value is not None:
        if record.data_value is not None:
            raise MultipleValueKindsError(index)
        return SenMLValue.boolean(record.bool_value)

    if record.data_value is not None:
        try:
            return SenMLValue.data(senml_base64.decode(record.data_value))
        except ValueError as e:
            raise InvalidBinaryValueError(index, str(e)) from e

    if base_value is not None:
        return SenMLValue.floating(base_value)
    return None
