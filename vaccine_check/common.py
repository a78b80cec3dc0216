"""Utility methods"""

import contextlib
import csv
import json
import logging
from typing import Any, TextIO

from vaccine_check import store

###############################################################################
#
# Helper Functions: reading files
#
###############################################################################


@contextlib.contextmanager
def _open(path: str, mode: str = "r", encoding: str = "utf8", **kwargs) -> TextIO:
    """A version of open() that handles file access across many filesystems (like S3)"""
    root = store.Root(path)
    if root.fs is None:
        raise ValueError(f"Unsupported location '{path}'")
    with root.fs.open(path, mode=mode, encoding=encoding, **kwargs) as f:
        yield f


def read_json(path: str) -> Any:
    """
    Reads json from a file
    :param path: filesystem path or URL
    :return: the parsed json structure
    """
    logging.debug("read_json() %s", path)

    with _open(path) as f:
        return json.load(f)


@contextlib.contextmanager
def read_csv(path: str) -> csv.DictReader:
    logging.debug("read_csv() %s", path)

    # Python docs say to use newline="", to support quoted multi-line fields.
    # And spreadsheet apps like Excel like to start CSV files with a byte-order mark.
    with _open(path, encoding="utf-8-sig", newline="") as csvfile:
        yield csv.DictReader(csvfile)


###############################################################################
#
# Helper Functions: Formatting
#
###############################################################################


def plural(count: int, noun: str) -> str:
    """Returns a phrase like '1 record' or '3 records'"""
    return f"{count:,} {noun}" if count == 1 else f"{count:,} {noun}s"

