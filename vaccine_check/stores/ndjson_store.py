"""Ndjson FHIR record store"""

import datetime
import json
import logging
import os

import cumulus_fhir_support

from vaccine_check import decoder, errors, fhir, store
from vaccine_check.stores import base

DEFAULT_FHIR_VERSION = "4.0.1"

# Fields that might hold the administration date, in order of preference.
# DSTU2 uses `date`, R4 uses `occurrenceDateTime` (and `recorded` for when it was written down).
DATE_FIELDS = ("occurrenceDateTime", "date", "recorded")

_EARLIEST = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


class NdjsonRecordStore(base.RecordStore):
    """
    Record store for a folder of FHIR ndjson files, either locally or at a remote URL (like S3).

    The folder doesn't say which FHIR release its records use, so the caller declares it.
    """

    def __init__(self, root: store.Root, fhir_version: str = DEFAULT_FHIR_VERSION):
        """
        :param root: folder to read ndjson from
        :param fhir_version: FHIR version the records are written in, like "4.0.1" or "DSTU2"
        """
        super().__init__(root)
        self.fhir_version = fhir_version
        self.schema_version = decoder.SchemaVersion.from_fhir_version(fhir_version)

    async def request_authorization(self) -> bool:
        # For local folders, we can cheaply ask the OS whether we'd be allowed in.
        # Missing folders and unsupported locations are not permission problems though,
        # they are reported as unreadable when fetching.
        if self.root.protocol == "file" and os.path.exists(self.root.path):
            return os.access(self.root.path, os.R_OK | os.X_OK)

        return True

    async def fetch_immunizations(
        self, limit: int = base.DEFAULT_LIMIT
    ) -> list[decoder.RawRecord]:
        if self.root.fs is None:
            raise errors.StoreUnreadableError(f"Unable to read records from '{self.root.path}'")

        try:
            if not self.root.isdir(self.root.path):
                raise errors.StoreUnreadableError(
                    f"Unable to find any Immunization records: '{self.root.path}' is not a folder"
                )

            found_files = cumulus_fhir_support.list_multiline_json_in_dir(
                self.root.path, {decoder.RESOURCE_TYPE}, fsspec_fs=self.root.fs
            )
            records = []
            for path in found_files:
                records.extend(self._read_records(path))
        except OSError as exc:
            raise errors.StoreUnreadableError(
                f"Unable to read Immunization records from '{self.root.path}': {exc}"
            ) from exc

        if not found_files:
            logging.warning("No Immunization files found in %s", self.root.path)

        # Most recent first. Python's sort is stable (even when reversed), so ties keep their file order.
        records.sort(key=_sort_key, reverse=True)
        return records[:limit]

    def _read_records(self, path: str) -> list[decoder.RawRecord]:
        """Reads every line of the file, without trying to decode anything"""
        records = []
        basename = os.path.basename(path)
        with self.root.fs.open(path, "rb", compression="infer") as f:
            for index, line in enumerate(f):
                line = line.strip()
                if not line:
                    continue
                records.append(
                    decoder.RawRecord(
                        schema_version=self.schema_version,
                        data=line,
                        source=f"{basename}:{index + 1}",
                    )
                )
        return records


def _sort_key(record: decoder.RawRecord) -> tuple[bool, datetime.datetime]:
    """
    Returns a sortable administration date for the record.

    We only peek at the record here, a full decode happens later. Records without a usable date
    (including lines that aren't even json) sort as the oldest.
    """
    try:
        resource = json.loads(record.data)
    except ValueError:
        return False, _EARLIEST

    if isinstance(resource, dict):
        for field in DATE_FIELDS:
            if when := fhir.aware_datetime(resource.get(field)):
                return True, when

    return False, _EARLIEST
