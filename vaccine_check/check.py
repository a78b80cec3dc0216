"""Runs a vaccination check end to end and reports on it"""

import logging
from collections.abc import Mapping

import rich
import rich.console
import rich.text

from vaccine_check import common, errors, scanner, stores


async def run_check(
    record_store: stores.RecordStore,
    table: Mapping[str, str],
    *,
    limit: int = stores.DEFAULT_LIMIT,
) -> scanner.MatchResult:
    """
    Asks for permission, fetches immunization records, and scans them for a matching vaccination.

    :raises PermissionDeniedError: if we are not allowed to read the records
    :raises StoreUnreadableError: if the records could not be read
    """
    if not await record_store.request_authorization():
        raise errors.PermissionDeniedError("Not authorized to access health records")

    records = await record_store.fetch_immunizations(limit=limit)
    logging.debug("Fetched %s", common.plural(len(records), "Immunization record"))

    return scanner.scan(records, table)


def describe_result(result: scanner.MatchResult, vaccine_type: str) -> str:
    """Returns a plain-text explanation of the scan result, suitable for showing to a user"""
    if result.matched:
        return f"{vaccine_type} vaccination found: {result.outcome.message}"

    message = f"No {vaccine_type} vaccination records found"
    if result.all_failed:
        message += f"\nAll {common.plural(result.failure_count, 'record')} failed to decode"
    elif result.failure_count:
        message += (
            f"\n{result.failure_count:,} of {common.plural(result.records_examined, 'record')}"
            " could not be decoded"
        )
    if result.last_error:
        message += f"\nLast error: {result.last_error}"
    return message


def render_result(
    result: scanner.MatchResult, vaccine_type: str, console: rich.console.Console | None = None
) -> None:
    """Prints the scan result to the console"""
    console = console or rich.get_console()
    headline, *details = describe_result(result, vaccine_type).split("\n")

    if result.matched:
        console.print(rich.text.Text(f"✓ {headline}", style="bold green"))
    else:
        console.print(rich.text.Text(f"✗ {headline}", style="bold red"))

    for detail in details:
        console.print(rich.text.Text(f"  {detail}", style="yellow"))
