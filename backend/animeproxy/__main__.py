"""Run the proxy with uvicorn: python -m animeproxy [--host H] [--port P] [--reload]."""

import argparse

from animeproxy.config import get_settings


def main(argv: list[str] | None = None) -> None:
    import uvicorn

    settings = get_settings()
    parser = argparse.ArgumentParser(description="Anime catalog proxy server")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument(
        "--reload", action="store_true", help="Auto-reload on code changes",
    )
    args = parser.parse_args(argv)

    uvicorn.run(
        "animeproxy.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
