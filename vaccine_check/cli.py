"""The command line interface to vaccine-check"""

import argparse
import asyncio
import logging
import sys

import rich
import rich.logging

from vaccine_check import check, cli_utils, errors, store, stores


def define_check_parser(parser: argparse.ArgumentParser) -> None:
    parser.usage = "vaccine-check [OPTION]... DIR"
    parser.description = "Look through FHIR Immunization records for a specific vaccination."

    parser.add_argument("dir", metavar="/path/to/records")

    cli_utils.add_check(parser)
    cli_utils.add_records(parser)
    cli_utils.add_aws(parser)
    cli_utils.add_debugging(parser)


async def check_main(args: argparse.Namespace) -> None:
    """Checks a folder of records for a vaccination and prints the result."""
    # record filesystem options before creating Roots
    store.set_user_fs_options(vars(args))

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.limit < 1:
        errors.fatal(f"--limit must be at least 1, not {args.limit}", errors.ARGS_INVALID)

    table = cli_utils.load_code_table(args.codes)
    record_store = stores.NdjsonRecordStore(store.Root(args.dir), fhir_version=args.fhir_version)

    try:
        with rich.get_console().status(f"Checking {args.vaccine_type} vaccination…"):
            result = await check.run_check(record_store, table, limit=args.limit)
    except errors.FatalError as exc:
        errors.fatal(str(exc), exc.status)

    check.render_result(result, args.vaccine_type)


async def main(argv: list[str]) -> None:
    # Use RichHandler for logging because it works better when interacting with other rich components
    # (like the status spinner). But also turn off all the complex bits - we just want the message.
    logging.basicConfig(
        format="%(message)s",
        handlers=[rich.logging.RichHandler(show_time=False, show_level=False, show_path=False)],
    )

    parser = argparse.ArgumentParser(prog="vaccine-check")
    define_check_parser(parser)
    args = parser.parse_args(argv)
    await check_main(args)


def main_cli():
    asyncio.run(main(sys.argv[1:]))  # pragma: no cover


if __name__ == "__main__":
    main_cli()  # pragma: no cover
