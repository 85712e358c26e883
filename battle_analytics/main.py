"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or computes one analytics report on the command line.
"""

import argparse
import asyncio
import json
import logging

import uvicorn

from battle_analytics.api.routers.analytics import api_serialize_analytics_snapshot
from battle_analytics.bootstrap import bootstrap_create_analytics_service, bootstrap_create_application
from battle_analytics.config import config_load_settings


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="Clip battle analytics runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "analytics-report"),
        help="Runtime command: `api` starts server, `analytics-report` prints one dashboard snapshot as JSON",
        type=str,
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if parsed_arguments.command == "analytics-report":
        main_print_analytics_report()
        return

    application = bootstrap_create_application()
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
        log_level=settings.log_level.lower(),
    )


def main_print_analytics_report() -> None:
    """Compute one dashboard snapshot and print it to stdout.

    Returns:
        None: Prints the serialized snapshot as a side effect.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    analytics_service = bootstrap_create_analytics_service()
    snapshot = asyncio.run(analytics_service.analytics_compute_snapshot())
    print(json.dumps(api_serialize_analytics_snapshot(snapshot), indent=2))


if __name__ == "__main__":
    main()
