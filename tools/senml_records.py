"""
senml_records.py - SenML raw and resolved record types

RawRecord mirrors one JSON object of a SenML pack: base fields, own fields
and any unrecognized fields. ResolvedRecord is the self-contained result of
applying the base fields (RFC 8428 Section 4.6).

JSON field names:

    bn  base name       n   name          s   sum
    bt  base time       u   unit          t   time
    bu  base unit       v   value         ut  update time
    bv  base value      vs  string value
    bs  base sum        vb  boolean value
    bver base version   vd  data value

Usage:
    from senml_records import RawRecord

    raw = RawRecord.from_dict({'n': 'temperature', 'v': 42.0}, index=0)
    raw.name     # 'temperature'
    raw.value    # 42.0
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from senml_errors import InvalidJSONError
from senml_time import SenMLTime, datetime_to_timestamp
from senml_value import SenMLValue, ValueKind

DEFAULT_VERSION = 10

MAX_VERSION = 2**64 - 1


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    try:
        result = float(value)
    except OverflowError:
        raise TypeError("number out of range") from None
    if not math.isfinite(result):
        raise TypeError("number out of range")
    return result


def _boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {type(value).__name__}")
    return value


def _unsigned(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an unsigned integer, got {type(value).__name__}")
    if not 0 <= value <= MAX_VERSION:
        raise TypeError(f"expected an unsigned integer, got {value}")
    return value


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


# JSON key -> (attribute, converter)
RAW_FIELDS = {
    'bn': ('base_name', _text),
    'bt': ('base_time', _number),
    'bu': ('base_unit', _text),
    'bv': ('base_value', _number),
    'bs': ('base_sum', _number),
    'bver': ('base_version', _unsigned),
    'n': ('name', _text),
    'u': ('unit', _text),
    'v': ('value', _number),
    'vs': ('string_value', _text),
    'vb': ('bool_value', _boolean),
    'vd': ('data_value', _text),
    's': ('sum', _number),
    't': ('time', _number),
    'ut': ('update_time', _number),
}


@dataclass
class RawRecord:
    """One record of a SenML pack, as found in the input."""
    base_name: Optional[str] = None
    base_time: Optional[float] = None
    base_unit: Optional[str] = None
    base_value: Optional[float] = None
    base_sum: Optional[float] = None
    base_version: Optional[int] = None
    name: Optional[str] = None
    unit: Optional[str] = None
    value: Optional[float] = None
    string_value: Optional[str] = None
    bool_value: Optional[bool] = None
    data_value: Optional[str] = None
    sum: Optional[float] = None
    time: Optional[float] = None
    update_time: Optional[float] = None
    extra_fields: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: Optional[int] = None) -> 'RawRecord':
        """
        Build a raw record from a decoded JSON object.

        null is treated as an absent field. Unrecognized keys are kept in
        extra_fields.

        Raises:
            InvalidJSONError: data is not an object or a known field has
                the wrong type
        """
        if not isinstance(data, dict):
            raise InvalidJSONError(index, f"expected an object, got {type(data).__name__}")

        kwargs = {}
        extra = {}
        for key, value in data.items():
            spec = RAW_FIELDS.get(key)
            if spec is None:
                extra[key] = value
                continue
            if value is None:
                continue
            attr, convert = spec
            try:
                kwargs[attr] = convert(value)
            except TypeError as e:
                raise InvalidJSONError(index, f"field '{key}': {e}") from e

        return cls(extra_fields=extra, **kwargs)


@dataclass
class ResolvedRecord:
    """
    A SenML record with all base fields applied.

    Not the most compact SenML representation, but a valid one: the
    resolved form can be parsed again and yields the same records.
    """
    name: str
    time: SenMLTime
    unit: Optional[str] = None
    value: Optional[SenMLValue] = None
    sum: Optional[float] = None
    update_time: Optional[float] = None
    base_version: Optional[int] = None
    extra_fields: Optional[Dict[str, Any]] = field(default=None)

    def get_float_value(self) -> Optional[float]:
        return self.value.as_float() if self.value is not None else None

    def get_string_value(self) -> Optional[str]:
        return self.value.as_string() if self.value is not None else None

    def get_bool_value(self) -> Optional[bool]:
        return self.value.as_bool() if self.value is not None else None

    def get_data_value(self) -> Optional[bytes]:
        return self.value.as_data() if self.value is not None else None

    @property
    def value_kind(self) -> Optional[ValueKind]:
        return self.value.kind if self.value is not None else None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready mapping, in SenML field order, extra fields last."""
        result = {'n': self.name}
        if self.unit is not None:
            result['u'] = self.unit
        if self.value is not None:
            key, value = self.value.to_field()
            result[key] = value
        if self.sum is not None:
            result['s'] = _finite_or_none(self.sum)
        seconds, precise = datetime_to_timestamp(self.time)
        result['t'] = precise if precise is not None else seconds
        if self.update_time is not None:
            result['ut'] = _finite_or_none(self.update_time)
        if self.base_version is not None:
            result['bver'] = self.base_version
        if self.extra_fields:
            for key, value in self.extra_fields.items():
                result.setdefault(key, value)
        return result
