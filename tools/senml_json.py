"""
senml_json.py - SenML JSON decoding and encoding

Parses a SenML pack (a JSON array of record objects), resolves it, and
serializes resolved records back to SenML JSON.

Usage:
    from senml_json import parse_json, to_json

    records = parse_json('[{"n": "temperature", "v": 42.0}]')
    records[0].name               # 'temperature'
    records[0].get_float_value()  # 42.0

    to_json(records)              # '[{"n":"temperature","v":42,"t":...}]'

    # Or without exceptions
    result = parse('[{"v": 1}]')
    if not result.success:
        print(result.errors)
"""

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from senml_errors import InvalidJSONError, SenMLError, TooManyRecordsError
from senml_records import RawRecord, ResolvedRecord
from senml_resolver import resolve_records
from senml_time import SenMLTime

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON number")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"number {literal} is out of range")
    return value


def decode_records(json_str: str, max_records: Optional[int] = None) -> List[RawRecord]:
    """
    Decode a SenML pack into raw records.

    Args:
        json_str: SenML JSON text
        max_records: Reject packs with more records than this

    Raises:
        InvalidJSONError: text is not a JSON array of record objects
        TooManyRecordsError: pack is larger than max_records
    """
    try:
        pack = json.loads(json_str, parse_float=_finite_float,
                          parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise InvalidJSONError(detail=str(e)) from e

    if not isinstance(pack, list):
        raise InvalidJSONError(detail=f"expected an array, got {type(pack).__name__}")

    if max_records is not None and len(pack) > max_records:
        raise TooManyRecordsError(detail=f"{len(pack)} > {max_records}")

    logger.debug("Decoded pack with %d records", len(pack))
    return [RawRecord.from_dict(item, index) for index, item in enumerate(pack)]


def parse_json(json_str: str, now: Optional[SenMLTime] = None,
               max_records: Optional[int] = None) -> List[ResolvedRecord]:
    """
    Parse SenML JSON and return resolved records.

    Args:
        json_str: SenML JSON text
        now: Reference time for relative times (default: current time)
        max_records: Reject packs with more records than this

    Returns:
        Resolved records, in pack order

    Raises:
        SenMLError: for malformed JSON or the first invalid record
    """
    records = decode_records(json_str, max_records)
    return resolve_records(records, now if now is not None else SenMLTime.now())


@dataclass
class ParseResult:
    """Result of parsing a SenML pack."""
    records: List[ResolvedRecord] = field(default_factory=list)
    error: Optional[SenMLError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def errors(self) -> List[str]:
        return [str(self.error)] if self.error is not None else []


def parse(json_str: str, now: Optional[SenMLTime] = None,
          max_records: Optional[int] = None) -> ParseResult:
    """Like parse_json, but reports errors in the result instead of raising."""
    try:
        return ParseResult(records=parse_json(json_str, now, max_records))
    except SenMLError as e:
        return ParseResult(error=e)


def to_json(records: Sequence[ResolvedRecord], indent: Optional[int] = None) -> str:
    """Serialize resolved records to SenML JSON (compact unless indent is set)."""
    separators = (',', ':') if indent is None else (',', ': ')
    return json.dumps(
        [record.to_dict() for record in records],
        indent=indent,
        separators=separators,
        ensure_ascii=False,
        allow_nan=False,
    )
