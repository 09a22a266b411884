"""Pre-flight check for the API's environment file.

Loads ``AppSettings`` from an env file so missing Google client settings or a
malformed URL show up before the API is started, and tracks a SHA256 baseline
of the file so unreviewed edits are noticed.

Commands::

    # Validate and store the baseline next to the env file.
    python -m scripts.check_env record --env-file /srv/jobjotter/.env \
        --hash-file /srv/jobjotter/.env.sha256

    # Validate and compare against the baseline (cron, deploy hooks).
    python -m scripts.check_env verify --env-file /srv/jobjotter/.env \
        --hash-file /srv/jobjotter/.env.sha256

    # Validate only.
    python -m scripts.check_env check --env-file /srv/jobjotter/.env

    # Validate and print the effective configuration, secrets masked.
    python -m scripts.check_env show --env-file /srv/jobjotter/.env
"""

from __future__ import annotations

import argparse
import hashlib
import json
import sys
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit, urlunsplit

from pydantic import ValidationError

from jobjotter.core.config import AppSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_RUNTIME_ERROR = 5

MASK = "********"


def file_checksum(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


def load_settings(env_file: Path) -> AppSettings:
    """Export the env file's values, then build settings from the environment."""
    if not env_file.exists():
        raise FileNotFoundError(
            f"Environment file {env_file} does not exist. "
            "Ensure the path is correct or create it before running this tool."
        )
    _load_env_file(str(env_file))
    return AppSettings()  # type: ignore[call-arg]


def mask_dsn(dsn: str) -> str:
    """Replace the password in a database URL."""
    parts = urlsplit(dsn)
    if not parts.password:
        return dsn
    netloc = parts.netloc.replace(f":{parts.password}@", f":{MASK}@", 1)
    return urlunsplit(parts._replace(netloc=netloc))


def redacted_summary(settings: AppSettings) -> dict[str, Any]:
    def secret(value: Any) -> str | None:
        return MASK if value else None

    frontend = settings.frontend_base_url
    return {
        "environment": settings.environment,
        "log_level": settings.log_level,
        "database_url": mask_dsn(settings.database_url),
        "cors_allowed_origins": list(settings.cors_allowed_origins),
        "frontend_base_url": str(frontend) if frontend else None,
        "secret_key": secret(settings.security.secret_key),
        "token_encryption_secret": secret(settings.security.token_encryption_secret),
        "bcrypt_work_factor": settings.bcrypt_work_factor,
        "google_client_id": settings.google.client_id,
        "google_client_secret": secret(settings.google.client_secret),
        "google_redirect_uri": str(settings.google.redirect_uri),
        "google_credential_mode": settings.credential_mode,
        "oauth_scopes": list(settings.oauth.scopes),
    }


def cmd_record(args: argparse.Namespace, settings: AppSettings) -> int:
    checksum = file_checksum(args.env_file)
    args.hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum to {args.hash_file} ({checksum})")
    return EXIT_OK


def cmd_verify(args: argparse.Namespace, settings: AppSettings) -> int:
    hash_file: Path = args.hash_file
    if not hash_file.exists():
        print(
            f"No checksum baseline at {hash_file}; run 'record' first.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = file_checksum(args.env_file)
    if expected != actual:
        print(
            f"Environment file {args.env_file} changed since the baseline was recorded.\n"
            f"  expected: {expected}\n"
            f"  actual:   {actual}",
            file=sys.stderr,
        )
        return EXIT_CHECKSUM_ERROR

    print("Environment checksum OK.")
    return EXIT_OK


def cmd_check(args: argparse.Namespace, settings: AppSettings) -> int:
    print("Settings OK.")
    return EXIT_OK


def cmd_show(args: argparse.Namespace, settings: AppSettings) -> int:
    print(json.dumps(redacted_summary(settings), indent=2))
    return EXIT_OK


COMMANDS = {
    "record": (cmd_record, "Validate settings and store the checksum baseline."),
    "verify": (cmd_verify, "Validate settings and compare the checksum with the baseline."),
    "check": (cmd_check, "Validate settings only."),
    "show": (cmd_show, "Validate settings and print them with secrets masked."),
}
_NEEDS_HASH_FILE = {"record", "verify"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate Job Jotter settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, (handler, help_text) in COMMANDS.items():
        sub = subparsers.add_parser(name, help=help_text)
        sub.set_defaults(handler=handler)
        sub.add_argument(
            "--env-file",
            default=Path(".env"),
            type=Path,
            help="Path to the environment file (default: .env).",
        )
        if name in _NEEDS_HASH_FILE:
            sub.add_argument(
                "--hash-file",
                required=True,
                type=Path,
                help="Location of the checksum baseline.",
            )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.env_file)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR
    except ValueError as exc:
        print(f"Settings rejected: {exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    return args.handler(args, settings)


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
