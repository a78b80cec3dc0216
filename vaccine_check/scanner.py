"""Scans a sequence of immunization records for the first matching vaccination"""

import dataclasses
import enum
import logging
from collections.abc import Iterable, Mapping

from vaccine_check import decoder, errors, matcher


class ScanState(enum.Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    MATCHED = "matched"
    NOT_FOUND = "not found"


@dataclasses.dataclass(frozen=True, kw_only=True)
class MatchResult:
    """The final outcome of a scan"""

    state: ScanState
    outcome: matcher.MatchOutcome | None = None

    # How many records were looked at (records after a match are never looked at)
    records_examined: int = 0

    # Records that could not be decoded, and the last reason why
    failure_count: int = 0
    last_error: errors.DecodeError | None = None

    @property
    def matched(self) -> bool:
        return self.state == ScanState.MATCHED

    @property
    def all_failed(self) -> bool:
        """True if nothing matched and not a single record could be decoded"""
        return (
            self.state == ScanState.NOT_FOUND
            and self.records_examined > 0
            and self.failure_count == self.records_examined
        )


class Scan:
    """
    A single, one-shot scan over a sequence of records.

    Records are visited strictly in the order given. The scan stops at the first record that matches
    the code table. Records that fail to decode are counted and skipped, never fatal.
    """

    def __init__(self, records: Iterable[decoder.RawRecord], table: Mapping[str, str]):
        self._records = records
        self._table = table
        self.state = ScanState.IDLE

    def run(self) -> MatchResult:
        if self.state != ScanState.IDLE:
            raise RuntimeError("A scan can only be run once")
        self.state = ScanState.SCANNING

        examined = 0
        failures = 0
        last_error = None

        for record in self._records:
            examined += 1

            try:
                fact = decoder.decode(record)
            except errors.DecodeError as exc:
                failures += 1
                last_error = exc
                logging.warning("Skipping record %s: %s", record.source or f"#{examined}", exc)
                continue

            if outcome := matcher.match(fact, self._table):
                self.state = ScanState.MATCHED
                return MatchResult(
                    state=self.state,
                    outcome=outcome,
                    records_examined=examined,
                    failure_count=failures,
                    last_error=last_error,
                )

        self.state = ScanState.NOT_FOUND
        return MatchResult(
            state=self.state,
            records_examined=examined,
            failure_count=failures,
            last_error=last_error,
        )


def scan(records: Iterable[decoder.RawRecord], table: Mapping[str, str]) -> MatchResult:
    """Looks through the records for the first vaccination listed in the code table"""
    return Scan(records, table).run()
