#!/usr/bin/env python3
"""Main entry point for the Shiptivity API server.

Bootstraps a Uvicorn ASGI server around shiptivity.api.app:create_app().
Loads .env from the current directory if present, resolves settings
(command line, then --config file, then environment, then defaults), opens
the clients database once for the life of the process and serves until
SIGINT/SIGTERM.
"""

import asyncio
import os
import signal
import sys
from argparse import ArgumentParser
from pathlib import Path

# Add the project root to Python path
sys.path.insert(0, str(Path(__file__).parent))

# Global flag for graceful shutdown
shutdown_event = asyncio.Event()

if __name__ == "__main__":
    # Parse arguments FIRST so --help works without any configuration
    parser = ArgumentParser(description="Start the Shiptivity API server")
    parser.add_argument("--db", help="Path to the clients SQLite database")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--host", help="Interface to bind")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument(
        "--seed",
        help="JSON file of clients loaded into the database if it is empty",
    )
    parser.add_argument(
        "--log-format",
        choices=["pretty", "json"],
        help="Log format (pretty or json). Overrides config and LOG_FORMAT env var.",
    )
    parser.add_argument(
        "--log-colors",
        type=lambda x: x.lower() in ("true", "1", "yes", "on"),
        help="Enable colored logs (true/false). Overrides config and LOG_COLORS env var.",
    )
    args, _ = parser.parse_known_args()

    # CLI flags win over .env and config; set them before the logger import
    if args.log_format:
        os.environ["LOG_FORMAT"] = args.log_format
    if args.log_colors is not None:
        os.environ["LOG_COLORS"] = "true" if args.log_colors else "false"

    from dotenv import load_dotenv

    env_file = Path.cwd() / ".env"
    env_loaded = env_file.exists() and load_dotenv(dotenv_path=env_file, override=False)

    from shiptivity.utils.logger import get_logger

    startup_logger = get_logger("server.startup")
    if env_loaded:
        startup_logger.debug("Loaded .env file", path=str(env_file))

    def signal_handler(signum, frame):
        """Handle shutdown signals gracefully."""
        sig_name = signal.Signals(signum).name
        startup_logger.info(f"Received {sig_name}, initiating graceful shutdown...")
        shutdown_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    from shiptivity.config import (
        ConfigValidationError,
        create_config_manager,
        settings,
    )

    if args.config:
        config_path = Path(args.config).expanduser().resolve()
        try:
            config_manager = create_config_manager(config_path)
            asyncio.run(config_manager.initialize())
            settings._config_manager = config_manager
            startup_logger.info("Configuration initialized", config_file=str(config_path))
        except (ConfigValidationError, ValueError, OSError) as e:
            startup_logger.error(
                "Failed to initialize configuration",
                config_file=str(config_path),
                error=str(e),
            )
            sys.exit(1)

    settings.apply_overrides(
        db_path=args.db,
        server_host=args.host,
        server_port=args.port,
        log_format=args.log_format,
        log_colors=args.log_colors,
    )
    config_valid, config_errors = settings.validation_status()
    if not config_valid:
        startup_logger.error("Invalid configuration", errors=config_errors)
        sys.exit(1)

    # Re-apply logging now that the config file has been read
    from shiptivity.utils.logger import configure_structlog

    os.environ.update(settings.logging_env())
    configure_structlog()

    try:
        import uvicorn

        from shiptivity.api.app import create_app
        from shiptivity.api.deps import dispose_db_engine, open_db_engine
        from shiptivity.config.logging_config import get_logging_config
        from shiptivity.core.errors import SeedDataError
        from shiptivity.db.clients import init_db
        from shiptivity.db.seed import load_seed_file, seed_clients

        # One engine for the whole process, released after the server stops
        engine = open_db_engine(settings.db_path)
        init_db(engine)

        if args.seed:
            try:
                seed_clients(engine, load_seed_file(Path(args.seed)))
            except SeedDataError as e:
                startup_logger.error("Failed to seed database", error=e.long_message)
                dispose_db_engine(engine)
                sys.exit(1)

        app = create_app(engine)

        startup_logger.info(
            "Starting Shiptivity API",
            server_url=f"http://{settings.server_host}:{settings.server_port}",
            docs_url=f"http://{settings.server_host}:{settings.server_port}/docs",
            database=str(engine.url),
        )

        config = uvicorn.Config(
            app,
            host=settings.server_host,
            port=settings.server_port,
            log_config=get_logging_config(),
            lifespan="on",
            timeout_graceful_shutdown=5,
        )
        server = uvicorn.Server(config)
        # We'll manage signals ourselves
        try:
            server.install_signal_handlers = False  # type: ignore[attr-defined]
        except AttributeError:
            pass

        async def run_server():
            serve_task = asyncio.create_task(server.serve())
            shutdown_task = asyncio.create_task(shutdown_event.wait())

            done, _pending = await asyncio.wait(
                {shutdown_task, serve_task}, return_when=asyncio.FIRST_COMPLETED
            )

            if shutdown_task in done:
                startup_logger.info("Stopping server due to shutdown signal...")
                server.should_exit = True
                await serve_task
            else:
                shutdown_task.cancel()

        try:
            asyncio.run(run_server())
        finally:
            dispose_db_engine(engine)
            startup_logger.info("Database connection closed")
    except ImportError as e:
        startup_logger.error(
            "Error importing required modules",
            error=str(e),
            hint="Run: pip install -e .",
        )
        sys.exit(1)
