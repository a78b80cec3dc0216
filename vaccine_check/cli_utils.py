"""Helper methods for CLI parsing."""

import argparse

from vaccine_check import codes, errors, stores
from vaccine_check.stores import ndjson_store


def add_check(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("vaccination")
    group.add_argument(
        "--vaccine-type",
        metavar="LABEL",
        default="COVID-19",
        help="name of the vaccination, for display only (default is COVID-19)",
    )
    group.add_argument(
        "--codes",
        metavar="PATH",
        help="JSON or CSV file of product codes to look for (default is COVID-19 vaccine codes)",
    )


def add_records(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("records")
    group.add_argument(
        "--fhir-version",
        metavar="VERSION",
        default=ndjson_store.DEFAULT_FHIR_VERSION,
        help="FHIR version of the records, like 1.0.2 or 4.0.1 "
        f"(default is {ndjson_store.DEFAULT_FHIR_VERSION})",
    )
    group.add_argument(
        "--limit",
        metavar="COUNT",
        type=int,
        default=stores.DEFAULT_LIMIT,
        help=f"only look at this many of the most recent records (default is {stores.DEFAULT_LIMIT})",
    )


def add_aws(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("AWS")
    group.add_argument(
        "--s3-region",
        metavar="REGION",
        help="if using S3 paths (s3://...), this is their region (default is us-east-1)",
    )
    group.add_argument(
        "--s3-kms-key",
        metavar="KEY",
        help="if using S3 paths (s3://...), this is the KMS key ID to use",
    )


def add_debugging(parser: argparse.ArgumentParser):
    group = parser.add_argument_group("debugging")
    group.add_argument("--verbose", action="store_true", help="show more detailed logging")
    return group


def load_code_table(path: str | None) -> codes.CodeTable:
    """Loads the user's code table (or the default one), exiting with a friendly error on failure"""
    if not path:
        return codes.default_table()

    try:
        table = codes.CodeTable.from_file(path)
    except (OSError, ValueError) as exc:
        errors.fatal(f"Could not load code table '{path}': {exc}", errors.CODE_TABLE_INVALID)

    if not table:
        errors.fatal(f"Code table '{path}' does not list any codes", errors.CODE_TABLE_INVALID)

    return table
