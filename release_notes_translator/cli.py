"""CLI entrypoint."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from release_notes_translator import credential_resolver
from release_notes_translator.errors import TranslatorError
from release_notes_translator.logging_config import setup_logging
from release_notes_translator.providers.factory import (
    DEFAULT_PROVIDER,
    available_provider_names,
    provider_config,
)
from release_notes_translator.report import print_summary_report
from release_notes_translator.run_logging import RunLogger
from release_notes_translator.translate import DEFAULT_MASTER_LOCALE, run_release_notes

# argparse dest -> configuration key handed to the providers
CONFIG_OPTIONS = (
    "provider",
    "platform",
    "master_locale",
    "model_name",
    "temperature",
    "max_tokens",
    "service_tier",
    "formality",
    "request_timeout",
    "context",
    "android_limitations",
    "openai_api_key",
    "anthropic_api_key",
    "gemini_api_key",
    "deepl_api_key",
)


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value else None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Translate app release notes with OpenAI, Anthropic, Gemini or DeepL"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # translate command
    translate_parser = subparsers.add_parser(
        "translate",
        help="Translate the master release notes into every locale directory"
    )
    translate_parser.add_argument(
        "--provider",
        type=str.lower,
        choices=available_provider_names(),
        default=os.getenv("LLM_PROVIDER", DEFAULT_PROVIDER),
        help=f"Translation provider (default: LLM_PROVIDER env or {DEFAULT_PROVIDER})"
    )
    translate_parser.add_argument(
        "--platform",
        type=str.lower,
        choices=["ios", "android"],
        default=os.getenv("PLATFORM", "ios"),
        help="Platform whose metadata to translate (default: PLATFORM env or ios)"
    )
    translate_parser.add_argument(
        "--master-locale",
        default=os.getenv("MASTER_LOCALE", DEFAULT_MASTER_LOCALE),
        help=f"Source locale (default: MASTER_LOCALE env or {DEFAULT_MASTER_LOCALE})"
    )
    translate_parser.add_argument(
        "--model-name",
        default=os.getenv("LLM_MODEL_NAME"),
        help="Model name (default: provider specific)"
    )
    translate_parser.add_argument(
        "--temperature",
        type=float,
        default=_env_float("GPT_TEMPERATURE"),
        help="Sampling temperature (default: provider specific)"
    )
    translate_parser.add_argument(
        "--max-tokens",
        type=int,
        help="Maximum response tokens (Anthropic only)"
    )
    translate_parser.add_argument(
        "--service-tier",
        choices=["auto", "default", "flex", "priority"],
        help="OpenAI service tier; flex raises the timeout to 900s"
    )
    translate_parser.add_argument(
        "--formality",
        choices=["default", "more", "less"],
        help="DeepL formality level"
    )
    translate_parser.add_argument(
        "--request-timeout",
        type=int,
        default=_env_int("GPT_REQUEST_TIMEOUT"),
        help="Request timeout in seconds (default: provider specific)"
    )
    translate_parser.add_argument(
        "--context",
        type=str,
        default=os.getenv("GPT_CONTEXT"),
        help="Context for translations (e.g., 'Fitness app, friendly tone.')"
    )
    translate_parser.add_argument(
        "--context-file",
        type=Path,
        help="Path to file containing context (alternative to --context)"
    )
    translate_parser.add_argument(
        "--android-limitations",
        action="store_true",
        default=None,
        help="Ask AI providers to stay under 500 characters regardless of platform"
    )
    for provider_name in credential_resolver.all_providers():
        param_key = credential_resolver.PROVIDER_CREDENTIALS[provider_name]["param_key"]
        translate_parser.add_argument(
            f"--{param_key.replace('_', '-')}",
            dest=param_key,
            help=credential_resolver.credential_help(provider_name)
        )
    translate_parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Project root containing fastlane/ (default: .)"
    )
    translate_parser.add_argument(
        "--last-run-file",
        type=Path,
        help="Timestamp file of the last successful run (default: <root>/last_successful_run.txt)"
    )
    translate_parser.add_argument(
        "--runs-dir",
        type=Path,
        help="Directory for run logs (default: no run logs)"
    )
    translate_parser.add_argument(
        "--pause",
        type=float,
        default=0.0,
        help="Seconds to wait between requests (default: 0)"
    )
    translate_parser.add_argument(
        "--force",
        action="store_true",
        help="Translate even if the master file has not changed since the last run"
    )
    translate_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    # providers command
    subparsers.add_parser(
        "providers",
        help="List providers and whether credentials are configured"
    )

    return parser


def build_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Collect provider configuration from parsed arguments, dropping unset options."""
    config = {
        key: getattr(args, key)
        for key in CONFIG_OPTIONS
        if getattr(args, key, None) is not None
    }

    if args.context_file:
        if args.context_file.exists():
            with open(args.context_file, "r", encoding="utf-8") as f:
                config["context"] = f.read().strip()
        else:
            print(f"Warning: Context file not found: {args.context_file}", file=sys.stderr)

    return config


def list_providers() -> None:
    configured = set(credential_resolver.available_providers())
    for name in available_provider_names():
        info = provider_config(name)
        marker = "✓" if name in configured else "✗"
        print(f"{marker} {name:<10} {info['display_name']}")
        if name not in configured:
            print(f"    {info['credential_help']}")


def main(argv: Optional[list] = None) -> None:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "providers":
        list_providers()

    elif args.command == "translate":
        setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)
        config = build_config(args)

        run_logger = None
        if args.runs_dir:
            run_logger = RunLogger(args.runs_dir)

        try:
            report = run_release_notes(
                config,
                root=args.root,
                last_run_file=args.last_run_file,
                run_logger=run_logger,
                pause=args.pause,
                force=args.force
            )
        except TranslatorError as e:
            print(f"✗ Error: {e}", file=sys.stderr)
            sys.exit(1)
        finally:
            if run_logger:
                run_logger.finalize()

        if report is None:
            print("⏭ Nothing translated")
            return

        print_summary_report(report)
        print(f"✓ Translation complete ({report['translated']}/{report['locales']} locales)")
        if run_logger:
            print(f"  Logs: {run_logger.run_dir}")

        if report["failed"]:
            sys.exit(1)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
