"""Tables of vaccine product codes to look for"""

import os
import types
from collections.abc import Iterable, Iterator, Mapping

from vaccine_check import common

# COVID-19 vaccine products.
# R4 records generally use CVX codes, while DSTU2 records generally use NDC codes.
COVID19_CODES = {
    # CVX
    "207": "Moderna",
    "208": "Pfizer",
    "210": "AstraZeneca",
    "212": "Janssen",
    # NDC
    "80777-273-99": "Moderna",
    "59267-1000-2": "Pfizer",
    "59267-1000-3": "Pfizer",
    "0310-1222-15": "AstraZeneca",
    "59676-580-15": "Janssen",
}


class CodeTable(Mapping[str, str]):
    """
    An immutable mapping of product code -> display name.

    Lookups are exact: no case folding, trimming, or other normalization of codes is ever done.
    """

    def __init__(self, codes: Mapping[str, str] | Iterable[tuple[str, str]] = ()):
        codes = dict(codes)  # take a private copy, so the caller can't change it under us
        for code, display in codes.items():
            if not isinstance(code, str) or not code:
                raise ValueError(f"Product codes must be non-empty strings, not {code!r}")
            if not isinstance(display, str):
                raise ValueError(f"Display name for code '{code}' must be a string, not {display!r}")
        self._codes = types.MappingProxyType(codes)

    def __getitem__(self, code: str) -> str:
        return self._codes[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)

    def __repr__(self) -> str:
        return f"CodeTable({dict(self._codes)!r})"

    @classmethod
    def from_file(cls, path: str) -> "CodeTable":
        """
        Loads a code table from a JSON or CSV file.

        JSON files should hold a single object like {"208": "Pfizer"}.
        CSV files should have a header row with "code" and "display" columns.

        Raises ValueError if the file can't be understood.
        """
        extension = os.path.splitext(path)[1].casefold()

        if extension == ".json":
            codes = common.read_json(path)
            if not isinstance(codes, dict):
                raise ValueError(f"Expected a JSON object of code/display pairs in '{path}'")
            return cls(codes)

        if extension == ".csv":
            codes = {}
            with common.read_csv(path) as reader:
                if not {"code", "display"}.issubset(reader.fieldnames or []):
                    raise ValueError(f"Expected 'code' and 'display' columns in '{path}'")
                for row in reader:
                    code, display = row["code"], row["display"]
                    if codes.get(code, display) != display:
                        raise ValueError(f"Code '{code}' is listed more than once in '{path}'")
                    codes[code] = display
            return cls(codes)

        raise ValueError(f"Unknown code table format for '{path}' (expected .json or .csv)")


def default_table() -> CodeTable:
    return CodeTable(COVID19_CODES)
