"""Command-line bootstrap for the redirect service.

Usage::

    url-redirector [--bind BIND] [--port PORT]
                   [--redis-host REDIS_HOST] [--redis-port REDIS_PORT]
    url-redirector --version

Flags override the matching environment settings; ``REDIRECT_URL`` and the
remaining options are read from the environment (or ``.env``) only.
"""

import argparse
from importlib.metadata import PackageNotFoundError, version

import uvicorn

from redirector.config import Settings, get_settings

__all__ = ["build_parser", "main", "settings_from_args"]

DISTRIBUTION = "url-redirector"


def _version() -> str:
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "unknown"


def _port(value: str) -> int:
    try:
        port = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port number: {value!r}") from None
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(f"port number out of range: {value!r}")
    return port


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=DISTRIBUTION, description="URL redirect HTTP server")
    parser.add_argument("--bind", default=settings.BIND_HOST, help="Bind to specific IP")
    parser.add_argument("--port", type=_port, default=settings.BIND_PORT, help="Run on a specific port number")
    parser.add_argument("--redis-host", default=settings.REDIS_HOST, help="Connect to redis using specific IP")
    parser.add_argument(
        "--redis-port", type=_port, default=settings.REDIS_PORT, help="Connect to redis using specific port number"
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {_version()}")
    return parser


def settings_from_args(argv: list[str] | None = None, settings: Settings | None = None) -> Settings:
    settings = settings or get_settings()
    args = build_parser(settings).parse_args(argv)
    return settings.model_copy(
        update={
            "BIND_HOST": args.bind,
            "BIND_PORT": args.port,
            "REDIS_HOST": args.redis_host,
            "REDIS_PORT": args.redis_port,
        }
    )


def main(argv: list[str] | None = None) -> None:
    settings = settings_from_args(argv)

    # Imported late so the app is built from the command-line settings
    from redirector.main import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.BIND_HOST,
        port=settings.BIND_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
