"""This module provides the entry point for running the converter."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from src.converter import builtin_dicts
from src.converter.config import (
    ConfigBoolParsingError,
    ConfigNotFoundError,
    load_config_file,
)
from src.converter.convert import (
    build_dictionary,
    convert_file,
    convert_text,
    write_output,
)
from src.converter.logger import LOG_FILE_PATH, setup_logging


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse the command line arguments.

    Args:
        argv (Optional[list[str]]): The arguments, defaults to `sys.argv`.

    Returns:
        argparse.Namespace: The parsed arguments.

    """
    parser = argparse.ArgumentParser(
        description="Convert text with OpenCC-style dictionaries.",
    )
    parser.add_argument(
        "--config_path",
        type=str,
        default=None,
        help="Optional path to the config file.",
        required=False,
    )
    parser.add_argument(
        "--dict",
        dest="dictionaries",
        action="append",
        default=[],
        help="A rule file to apply as one more layer. May be repeated; "
        "layers run in the order given, after the configured ones.",
    )
    parser.add_argument(
        "--builtin",
        choices=sorted(builtin_dicts.BUILTIN_DICTIONARIES),
        default=None,
        help="A built-in dictionary to apply after the configured layers.",
    )
    parser.add_argument(
        "--data_dir",
        type=str,
        default=None,
        help="The OpenCC data/dictionary directory for built-in "
        "dictionaries.",
    )
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="The file to convert (default: standard input).",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Where to write the result (default: standard output).",
    )
    parser.add_argument(
        "--log_details",
        action="store_true",
        help="Log every conversion with its execution time.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the converter.

    Args:
        argv (Optional[list[str]]): The arguments, defaults to `sys.argv`.

    Returns:
        int: The process exit status.

    """
    args = parse_args(argv)

    dictionary_paths: list[Path] = []
    builtin: Optional[str] = None
    data_dir: Optional[Path] = None
    log_details: bool = args.log_details
    log_file = LOG_FILE_PATH

    try:
        if args.config_path is not None:
            config = load_config_file(Path(args.config_path))
            dictionary_paths.extend(config.dictionary_paths)
            builtin = config.builtin
            data_dir = config.opencc_data_dir
            log_details = log_details or config.log_details
            if config.log_file is not None:
                log_file = config.log_file

        if args.builtin is not None:
            builtin = args.builtin
        if args.data_dir is not None:
            data_dir = Path(args.data_dir)
        if data_dir is not None:
            builtin_dicts.set_data_dir(data_dir)

        setup_logging(log_file)

        if builtin is None:
            layered = build_dictionary(
                dictionary_paths + [Path(p) for p in args.dictionaries],
            )
        else:
            # The built-in layer runs between configured and extra files
            layered = build_dictionary(dictionary_paths, builtin)
            if args.dictionaries:
                layered = layered.chain(
                    build_dictionary([Path(p) for p in args.dictionaries]),
                )

        output_path = Path(args.output) if args.output else None
        if args.input is not None:
            converted = convert_file(
                layered,
                Path(args.input),
                output_path,
                log_details,
            )
        else:
            converted = convert_text(
                layered,
                # Raw bytes keep CRLF line endings intact
                sys.stdin.buffer.read().decode("utf-8"),
                "<stdin>",
                log_details,
            )
            if output_path is not None:
                write_output(output_path, converted)

    except (
        ConfigBoolParsingError,
        ConfigNotFoundError,
        FileNotFoundError,
        KeyError,
        RuntimeError,
        ValueError,
    ) as e:
        print(f"[CONVERTER] Error: {e}", file=sys.stderr)
        return 1

    if output_path is None:
        sys.stdout.write(converted)
    return 0


if __name__ == "__main__":
    sys.exit(main())
