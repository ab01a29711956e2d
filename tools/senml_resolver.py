"""
senml_resolver.py - Resolve SenML records

Applies base fields to the records of a pack (RFC 8428 Section 4.6) and
returns one self-contained ResolvedRecord per input record.

Base fields set by a record apply to that record and every following record
until another record overrides them. They are carried in a
ResolutionContext, which resolve_record() takes and returns, so the whole
pack is a fold over its records:

    context = ResolutionContext()
    for index, raw in enumerate(records):
        context, resolved = resolve_record(context, raw, index, now)

The first invalid record aborts resolution with a SenMLError; there is no
partial output.

Usage:
    from senml_resolver import resolve_records

    resolved = resolve_records(raw_records, SenMLTime.now())
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from senml_errors import (
    DifferentBaseVersionError, InvalidNameError, InvalidTimeError,
    InvalidVersionNumberError, MissingNameError,
)
from senml_name import validate_name
from senml_records import DEFAULT_VERSION, RawRecord, ResolvedRecord
from senml_time import SenMLTime, convert_senml_time
from senml_value import SenMLValue, resolve_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionContext:
    """Base fields in effect for the current record."""
    base_name: Optional[str] = None
    base_time: Optional[float] = None
    base_unit: Optional[str] = None
    base_value: Optional[float] = None
    base_sum: Optional[float] = None
    base_version: Optional[int] = None

    def apply(self, record: RawRecord) -> 'ResolutionContext':
        """Overwrite every slot the record sets a base field for."""
        changes = {}
        for attr in ('base_name', 'base_time', 'base_unit', 'base_value', 'base_sum'):
            value = getattr(record, attr)
            if value is not None:
                changes[attr] = value
        return replace(self, **changes) if changes else self

    def reconcile_version(self, version: Optional[int]) -> 'ResolutionContext':
        """
        Pin the pack version.

        The first record fixes the version for the whole pack, explicitly
        or by defaulting to 10.
        """
        if version is not None:
            if self.base_version is not None:
                if self.base_version != version:
                    raise DifferentBaseVersionError(
                        detail=f"expected {self.base_version}, got {version}")
                return self
            if version == 0:
                raise InvalidVersionNumberError()
            return replace(self, base_version=version)

        if self.base_version is None:
            return replace(self, base_version=DEFAULT_VERSION)
        return self


def _resolve_name(context: ResolutionContext, record: RawRecord, index: int) -> str:
    if record.name is None and context.base_name is None:
        raise MissingNameError(index)

    name = (context.base_name or '') + (record.name or '')
    if not validate_name(name):
        raise InvalidNameError(index, repr(name))
    return name


def _resolve_sum(context: ResolutionContext, record: RawRecord) -> Optional[float]:
    if record.sum is None:
        return context.base_sum
    if context.base_sum is None:
        return record.sum
    return context.base_sum + record.sum


def resolve_record(context: ResolutionContext, record: RawRecord, index: int,
                   now: SenMLTime) -> Tuple[ResolutionContext, ResolvedRecord]:
    """
    Resolve one record against the current base fields.

    Args:
        context: Base fields from the preceding records
        record: Raw record to resolve
        index: Position of the record in the pack, for error reporting
        now: Reference time for relative times

    Returns:
        (context, resolved) where context includes this record's base fields

    Raises:
        SenMLError: the record is invalid
    """
    context = context.apply(record)
    context = context.reconcile_version(record.base_version)

    name = _resolve_name(context, record, index)

    unit = record.unit if record.unit is not None else context.base_unit

    value = resolve_value(record, context.base_value, index)

    seconds = (context.base_time or 0.0) + (record.time or 0.0)
    time = convert_senml_time(seconds, now)
    if time is None:
        raise InvalidTimeError(index, repr(seconds))

    total = _resolve_sum(context, record)

    # A record with neither value nor sum has a value of 0; sum never defaults
    if value is None and total is None:
        value = SenMLValue.floating(0.0)

    version = context.base_version if context.base_version != DEFAULT_VERSION else None

    resolved = ResolvedRecord(
        name=name,
        unit=unit,
        value=value,
        sum=total,
        time=time,
        update_time=record.update_time,
        base_version=version,
        extra_fields=record.extra_fields or None,
    )
    return context, resolved


def resolve_records(records: Sequence[RawRecord], now: SenMLTime) -> List[ResolvedRecord]:
    """
    Resolve a pack of raw records.

    Args:
        records: Raw records in pack order
        now: Reference time for relative times

    Returns:
        One resolved record per raw record, in the same order

    Raises:
        SenMLError: for the first invalid record
    """
    context = ResolutionContext()
    resolved = []
    for index, record in enumerate(records):
        context, result = resolve_record(context, record, index, now)
        resolved.append(result)

    logger.debug("Resolved %d records (version %s)", len(resolved), context.base_version)
    return resolved
