"""Various test helper methods"""

import contextlib
import functools
import inspect
import json
import os
import tempfile
import unittest
from unittest import mock

from vaccine_check import decoder


class AsyncTestCase(unittest.IsolatedAsyncioTestCase):
    """
    Test case to hold some common code (suitable for async *OR* sync tests)

    It also works around a particularly annoying async test case bug in Python 3.10.
    """

    def setUp(self):
        super().setUp()

        # It's so common to want to see more than the tiny default fragment.
        # So we just enable this across the board.
        self.maxDiff = None

    def make_tempdir(self) -> str:
        """Creates a temporary dir that will be automatically cleaned up"""
        tempdir = tempfile.TemporaryDirectory()
        self.addCleanup(tempdir.cleanup)
        return tempdir.name

    def patch(self, *args, **kwargs) -> mock.Mock:
        """Syntactic sugar to ease making a mock over a test's lifecycle, without decorators"""
        patcher = mock.patch(*args, **kwargs)
        self.addCleanup(patcher.stop)
        return patcher.start()

    @contextlib.contextmanager
    def assert_fatal_exit(self, code: int | None = None):
        with self.assertRaises(SystemExit) as cm:
            yield
        if code is not None:
            self.assertEqual(cm.exception.code, code)

    async def _catch_system_exit(self, method):
        try:
            ret = method()
            if inspect.isawaitable(ret):
                return await ret
            return ret
        except SystemExit:
            self.fail("Raised unexpected system exit")

    def _callTestMethod(self, method):
        """
        Works around an async test case bug in python 3.10 and below.

        This seems to be some version of https://github.com/python/cpython/issues/83282
        but fixed & never backported.

        This class works around that by wrapping all test methods and translating uncaught
        SystemExits into failures.
        _callTestMethod() can be deleted once we no longer use python 3.10 in our testing suite.
        """
        return super()._callTestMethod(functools.partial(self._catch_system_exit, method))


###############################################################################
#
# Immunization builders
#
###############################################################################


def _vaccine_code(code: str | None) -> dict:
    coding = {"system": "http://hl7.org/fhir/sid/cvx"}
    if code is not None:
        coding["code"] = code
    return {"coding": [coding]}


def make_r4_immunization(
    code: str | None = "208", recorded: str | None = "2021-03-01", **kwargs
) -> dict:
    """Builds a minimal R4 Immunization resource"""
    resource = {
        "resourceType": "Immunization",
        "id": "imm-r4",
        "status": "completed",
        "vaccineCode": _vaccine_code(code),
    }
    if recorded is not None:
        resource["recorded"] = recorded
    resource.update(kwargs)
    return resource


def make_dstu2_immunization(
    code: str | None = "59267-1000-2", date: str | None = "2021-03-01", **kwargs
) -> dict:
    """Builds a minimal DSTU2 Immunization resource"""
    resource = {
        "resourceType": "Immunization",
        "id": "imm-dstu2",
        "status": "completed",
        "wasNotGiven": False,
        "vaccineCode": _vaccine_code(code),
    }
    if date is not None:
        resource["date"] = date
    resource.update(kwargs)
    return resource


def r4_record(resource: dict | None = None, **kwargs) -> decoder.RawRecord:
    resource = resource or make_r4_immunization(**kwargs)
    return decoder.RawRecord(
        schema_version=decoder.SchemaVersion.CURRENT_V2, data=json.dumps(resource).encode("utf8")
    )


def dstu2_record(resource: dict | None = None, **kwargs) -> decoder.RawRecord:
    resource = resource or make_dstu2_immunization(**kwargs)
    return decoder.RawRecord(
        schema_version=decoder.SchemaVersion.LEGACY_V1, data=json.dumps(resource).encode("utf8")
    )


def unrecognized_record(resource: dict | None = None) -> decoder.RawRecord:
    resource = resource or make_r4_immunization()
    return decoder.RawRecord(
        schema_version=decoder.SchemaVersion.UNRECOGNIZED, data=json.dumps(resource)
    )


def write_ndjson(path: str, rows: list[dict | str]) -> None:
    """Writes rows to an ndjson file (string rows are written as-is, to allow for broken lines)"""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf8") as f:
        for row in rows:
            f.write(row if isinstance(row, str) else json.dumps(row))
            f.write("\n")
