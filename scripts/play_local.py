"""Start the local pass-and-play FastAPI server."""

from __future__ import annotations

import argparse
import logging


def main() -> None:
    """Run the local play server with uvicorn."""
    parser = argparse.ArgumentParser(description="Run Love Letter local play server.")
    parser.add_argument(
        "--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port", type=int, default=8000, help="Port number (default: 8000)"
    )
    parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )
    parser.add_argument("--verbose", action="store_true", help="Log engine activity.")
    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    import uvicorn

    uvicorn.run(
        "loveletter.server.local_api:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
