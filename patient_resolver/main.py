"""Command line interface for the patient_resolver package."""
import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .config import (
    DEFAULT_SUGGESTION_LIMIT,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
    ENV_PRODUCTION_LOGGING,
    LOGGER_NAME,
    VALID_OUTPUT_FORMATS,
    env_flag,
    get_env_or_default,
)
from .exceptions import PatientResolverError
from .matching import (
    ACTION_DISAMBIGUATE,
    decide_assignment,
    disambiguation_message,
    find_matching_patients,
    normalize_room,
    suggest_patients,
)
from .output_formatter import OutputFormatter
from .roster import load_roster
from .secure_logging import configure_secure_logging


def setup_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolves spoken or typed patient references (room, name, or both) against a ward roster.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument(
        '--debug', '-v',
        action='store_true',
        help='Enable verbose debug output (development log format, unmasked identifiers).'
    )
    parser.add_argument(
        '--log-file', type=str, metavar='FILE_PATH', default=None,
        help=f'Optional log file. Defaults to ${ENV_LOG_FILE} when set.'
    )
    subparsers = parser.add_subparsers(
        dest='action', help='The main action to perform.', required=True, metavar='ACTION'
    )

    # --- Sub-command: resolve ---
    parser_resolve = subparsers.add_parser('resolve', help='Resolve a patient reference against a roster.')
    parser_resolve.add_argument(
        '--roster', '-r', required=True, metavar='ROSTER_FILE',
        help='REQUIRED. JSON or CSV roster with id, room and name fields.'
    )
    parser_resolve.add_argument(
        '--format', '-f', choices=VALID_OUTPUT_FORMATS, default='stdout',
        help='Output format: json, or stdout (table to console). Default: stdout.'
    )
    parser_resolve.add_argument(
        '--output', '-o', type=str, metavar='FILE_PATH',
        help='Optional path to save the result as JSON.'
    )
    parser_resolve.add_argument(
        'text', nargs='+',
        help='Search text, e.g. "208", "Sarah Johnson", "Sarah in 2A-208".'
    )

    # --- Sub-command: suggest ---
    parser_suggest = subparsers.add_parser('suggest', help='List autosuggest entries for manual patient search.')
    parser_suggest.add_argument('--roster', '-r', required=True, metavar='ROSTER_FILE',
        help='REQUIRED. JSON or CSV roster with id, room and name fields.')
    parser_suggest.add_argument('--limit', '-n', type=int, default=DEFAULT_SUGGESTION_LIMIT, metavar='N',
        help=f'Maximum number of suggestions (default: {DEFAULT_SUGGESTION_LIMIT}).')
    parser_suggest.add_argument('text', nargs='+', help='Partial search text.')

    # --- Sub-command: normalize-room ---
    parser_normalize = subparsers.add_parser('normalize-room', help='Print the normalized token for a room reference.')
    parser_normalize.add_argument('text', nargs='+', help='Room reference, e.g. "two A two oh eight".')

    return parser


def setup_logging(debug: bool = False, log_file: Optional[str] = None):
    level_name = get_env_or_default(ENV_LOG_LEVEL, "INFO").upper()
    log_level = logging.DEBUG if debug else getattr(logging, level_name, logging.INFO)
    production_mode = env_flag(ENV_PRODUCTION_LOGGING, default=not debug)
    configure_secure_logging(log_level, log_file or get_env_or_default(ENV_LOG_FILE) or None, production_mode)


def handle_resolve(args, logger: logging.Logger) -> None:
    patients = load_roster(args.roster)
    text = " ".join(args.text)
    result = find_matching_patients(text, patients)
    decision = decide_assignment(result)
    logger.debug(f"Resolution finished with action '{decision.action}'.")

    json_output = OutputFormatter.format_as_json(result, decision)
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as outfile:
            outfile.write(json_output)
        logger.info(f"Result written to '{args.output}'.")

    if args.format == 'json':
        print(json_output)
    else:
        print(OutputFormatter.format_as_table(result))
        if decision.action == ACTION_DISAMBIGUATE:
            print(disambiguation_message(text, result))
        print(f"Next step: {decision.action}")


def handle_suggest(args, logger: logging.Logger) -> None:
    patients = load_roster(args.roster)
    suggestions = suggest_patients(" ".join(args.text), patients, limit=args.limit)
    logger.debug(f"Produced {len(suggestions)} suggestions.")
    print(OutputFormatter.format_patient_list(suggestions))


def handle_normalize_room(args, logger: logging.Logger) -> None:
    print(normalize_room(" ".join(args.text)))


ACTION_HANDLERS = {
    'resolve': handle_resolve,
    'suggest': handle_suggest,
    'normalize-room': handle_normalize_room,
}


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()
    parser = setup_arg_parser()
    args = parser.parse_args(argv)

    debug = getattr(args, 'debug', False)
    setup_logging(debug, args.log_file)
    logger = logging.getLogger(LOGGER_NAME)

    handler = ACTION_HANDLERS.get(args.action)
    if handler is None:  # Should not happen due to argparse
        logger.critical(f"Unknown action: {args.action}")
        sys.exit(1)

    try:
        handler(args, logger)
    except PatientResolverError as e:
        logger.error(f"{type(e).__name__}: {e}", exc_info=debug)
        sys.exit(1)
    except OSError as e:
        logger.error(f"Could not write output: {e}", exc_info=debug)
        sys.exit(1)

    logger.debug(f"--- {args.action} finished ---")


if __name__ == "__main__":
    main()
