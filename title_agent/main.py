#!/usr/bin/env python3
"""
PR Title Agent - Main Entry Point

Checks pull request titles against the Conventional Commits format and
suggests (or applies) a better title generated by an AI backend.

Usage:
    python -m title_agent.main check "fix(api): handle empty payloads"
    python -m title_agent.main process --repo owner/repo --pr-number 123

Or via GitHub Actions, where inputs arrive as INPUT_* environment variables.
"""

import argparse
import asyncio
import logging
import sys
from typing import Tuple

from .config import ActionConfig, ConfigurationError
from .models import ActionTaken, OperationMode, ProcessingResult, ValidationOptions
from .orchestrator import TitleProcessor
from .pipeline import SuggestionPipeline
from .providers import (
    PROVIDERS,
    GeneratorSettings,
    ProviderCache,
    create_generator,
    supported_providers,
)
from .tools import (
    GitHubTool,
    build_action_outputs,
    validate_title,
    write_action_outputs,
)
from .utils import get_logger, setup_logging


async def run_processing(config: ActionConfig) -> Tuple[str, ProcessingResult]:
    """
    Run title processing for the configured PR.

    Args:
        config: Validated configuration

    Returns:
        (original title, ProcessingResult)
    """
    logger = get_logger()
    logger.info(f"Processing {config.repo} PR #{config.pr_number} in {config.mode.value} mode")

    github = GitHubTool(repo=config.repo, token=config.github_token)
    generator = create_generator(
        config.provider,
        GeneratorSettings(model=config.model),
        cache=ProviderCache(),
    )
    pipeline = SuggestionPipeline(
        generator,
        max_retries=config.max_retries,
        retry_delay=config.retry_delay,
        custom_prompt=config.custom_prompt,
    )

    pr = await github.get_pr_context(config.pr_number)
    logger.info(f'Current title: "{pr.title}"')

    processor = TitleProcessor(config, pipeline, github)
    result = await processor.process(pr)
    return pr.title, result


def report_result(original_title: str, result: ProcessingResult):
    """Print a short summary and write the step outputs when running in Actions."""
    print("\n=== PR Title Result ===")
    print(f"Original title: {original_title}")
    print(f"Conventional: {'yes' if result.is_conventional else 'no'}")
    print(f"Action taken: {result.action_taken.value}")
    for i, suggestion in enumerate(result.suggestions, start=1):
        print(f"  {i}. {suggestion}")
    if result.error_message:
        print(f"Error: {result.error_message}")

    write_action_outputs(build_action_outputs(result, original_title))


def cmd_check(args):
    """Handle 'check' subcommand."""
    allowed_types = ValidationOptions().allowed_types
    if args.allowed_types:
        allowed_types = tuple(t.strip() for t in args.allowed_types.split(",") if t.strip())

    options = ValidationOptions(
        allowed_types=allowed_types,
        require_scope=args.require_scope,
        max_length=args.max_length,
        min_description_length=args.min_description_length,
    )

    result = validate_title(args.title, options)
    if result.is_valid:
        print(f"OK: {args.title}")
        sys.exit(0)

    print(f"Invalid: {args.title}")
    for error in result.errors:
        print(f"  - {error}")
    if result.suggestions:
        print("Suggestions:")
        for suggestion in result.suggestions:
            print(f"  {suggestion}")
    sys.exit(1)


def cmd_process(args):
    """Handle 'process' subcommand."""
    config = ActionConfig.from_env()

    if args.repo:
        config.repo = args.repo
    if args.pr_number:
        config.pr_number = args.pr_number
    if args.mode:
        config.mode = OperationMode(args.mode)
    if args.provider:
        config.provider = args.provider
    if args.model:
        config.model = args.model
    if args.skip_if_conventional:
        config.skip_if_conventional = True
    if args.debug:
        config.debug = True

    setup_logging(level=logging.DEBUG if config.debug else logging.INFO)
    logger = get_logger()

    try:
        config.validate()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        original_title, result = asyncio.run(run_processing(config))
    except Exception as e:
        logger.exception(f"Title processing failed: {e}")
        sys.exit(1)

    report_result(original_title, result)
    sys.exit(1 if result.action_taken is ActionTaken.ERROR else 0)


def cmd_providers(args):
    """Handle 'providers' subcommand."""
    for name in supported_providers():
        info = PROVIDERS[name]
        model = info.default_model or "(backend default)"
        key = info.api_key_env or "-"
        print(f"{name:<14} {info.name:<18} model={model} key={key}")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Conventional Commits PR title agent"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # check command
    check_parser = subparsers.add_parser("check", help="Validate a title locally")
    check_parser.add_argument("title", help="Title to validate")
    check_parser.add_argument(
        "--allowed-types",
        type=str,
        help="Comma-separated list of allowed commit types"
    )
    check_parser.add_argument(
        "--require-scope",
        action="store_true",
        help="Require a scope, e.g. feat(api): ..."
    )
    check_parser.add_argument(
        "--max-length",
        type=int,
        default=72,
        help="Maximum header length (default: 72)"
    )
    check_parser.add_argument(
        "--min-description-length",
        type=int,
        default=3,
        help="Minimum description length (default: 3)"
    )

    # process command
    process_parser = subparsers.add_parser("process", help="Process a PR title")
    process_parser.add_argument(
        "--repo",
        type=str,
        help="Repository in format owner/repo"
    )
    process_parser.add_argument(
        "--pr-number",
        type=int,
        help="Pull request number"
    )
    process_parser.add_argument(
        "--mode",
        type=str,
        choices=[m.value for m in OperationMode],
        help="auto updates the title, suggest posts a comment"
    )
    process_parser.add_argument(
        "--provider",
        type=str,
        choices=supported_providers(),
        help="Generation backend"
    )
    process_parser.add_argument(
        "--model",
        type=str,
        help="Model name for the backend"
    )
    process_parser.add_argument(
        "--skip-if-conventional",
        action="store_true",
        help="Do nothing when the title is already conventional"
    )
    process_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    # providers command
    subparsers.add_parser("providers", help="List generation backends")

    args = parser.parse_args()

    if args.command == "check":
        cmd_check(args)
    elif args.command == "process":
        cmd_process(args)
    elif args.command == "providers":
        cmd_providers(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
