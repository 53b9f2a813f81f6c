"""CLI entrypoint: python -m sticker_hook.server"""

from __future__ import annotations

import argparse
import logging

from sticker_hook.server.config import ServerConfig


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="sticker-hook",
        description="Sticker Hook — Slack slash command for Swarm stickers",
    )
    p.add_argument("--host", default=None, help="Bind host (default: $HOST or 0.0.0.0)")
    p.add_argument("--port", type=int, default=None, help="Bind port (default: $PORT or 3000)")

    # Catalog
    p.add_argument("--source-url", default=None, help="Sticker catalog URL")
    p.add_argument("--refresh-schedule", default=None,
                   help="Cron expression for catalog refresh (5 or 6 fields)")
    p.add_argument("--no-refresh", action="store_true",
                   help="Disable catalog loading (for local testing)")
    p.add_argument("--default-size", type=int, default=None, help="Default image size")

    # Aliases
    p.add_argument("--redis-url", default=None,
                   help="Redis URL for alias persistence (default: $REDIS_URL)")

    # Logging
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    return p.parse_args(argv)


def build_config(args: argparse.Namespace, environ: dict[str, str] | None = None) -> ServerConfig:
    """Environment first, then any flags given on the command line."""
    config = ServerConfig.from_env(environ)
    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.source_url is not None:
        config.source_url = args.source_url
    if args.refresh_schedule is not None:
        config.refresh_schedule = args.refresh_schedule
    if args.no_refresh:
        config.refresh_enabled = False
    if args.default_size is not None:
        config.default_size = args.default_size
    if args.redis_url is not None:
        config.redis_url = args.redis_url
    return config


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    config = build_config(args)
    _run_rest(config)


def _run_rest(config: ServerConfig) -> None:
    import uvicorn

    from sticker_hook.server.rest.app import create_app

    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
