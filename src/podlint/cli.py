"""Command-line entry point: ``podlint <path-to-manifest>``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError as SettingsError

from podlint import __version__
from podlint.parser.loader import DocumentLoadError, TrackedLoader, YAMLSafetyError
from podlint.settings import LOG_LEVELS, Settings
from podlint.validator.schema import CpuProfile, validate_documents

logger = logging.getLogger("podlint.cli")

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="podlint",
        description="Validate a Pod manifest and report every rule violation with its line.",
    )
    parser.add_argument("path", help="Path to the YAML manifest")
    parser.add_argument(
        "--cpu-profile",
        choices=[profile.value for profile in CpuProfile],
        default=CpuProfile.PERMISSIVE.value,
        help="cpu check: 'permissive' requires an integer, 'strict' also rejects values <= 0",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run validation and return the process exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # --help / --version exit cleanly; usage errors collapse to a plain failure.
        return EXIT_OK if exc.code in (0, None) else EXIT_FAILURE

    try:
        settings = Settings()
    except SettingsError as exc:
        detail = "; ".join(str(err["msg"]) for err in exc.errors())
        print(f"podlint: invalid configuration: {detail}", file=sys.stderr)
        return EXIT_FAILURE

    logging.basicConfig(level=args.log_level or settings.log_level)
    cpu_profile = CpuProfile(args.cpu_profile)
    logger.info("podlint v%s checking %s (cpu_profile=%s)", __version__, args.path, cpu_profile)

    file_path = args.path
    loader = TrackedLoader()
    try:
        documents = loader.load(Path(file_path))
    except OSError as exc:
        logger.debug("read failure: %s", exc)
        print(f"{file_path} cannot read file", file=sys.stderr)
        return EXIT_FAILURE
    except (DocumentLoadError, YAMLSafetyError) as exc:
        logger.debug("parse failure: %s", exc)
        print(f"{file_path} invalid yaml format", file=sys.stderr)
        return EXIT_FAILURE

    result = validate_documents(documents, file_path, cpu_profile=cpu_profile)
    for line in result.render():
        print(line, file=sys.stderr)
    return EXIT_OK if result.valid else EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
