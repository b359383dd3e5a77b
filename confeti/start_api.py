#!/usr/bin/env python3
"""
confeti API Starter
Runs the statistics API with settings from ConfigService.
"""

import logging

import uvicorn

from confeti.app import application
from confeti.helpers.logging_helper import configure_logging


def main() -> None:
    api_cfg = application.config_service.make_api_config()
    configure_logging(api_cfg.log_level)

    logging.info(f"Starting confeti API on {api_cfg.host}:{api_cfg.port}...")
    logging.info("  - Report statistics: /api/v1/report/stat/{tag,language}")
    logging.info("  - Speaker statistics: /api/v1/speaker/stat[/all|/raw]")

    uvicorn.run(
        "confeti.interfaces.api.api_app:api_app",
        host=api_cfg.host,
        port=api_cfg.port,
        timeout_keep_alive=90,
        log_level=api_cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
