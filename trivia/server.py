"""
Arranque del servidor con uvicorn

    astro-trivia --port 8080

uvicorn se encarga del apagado ordenado con SIGINT/SIGTERM.
"""

import argparse
import logging
from typing import Optional, Sequence

import uvicorn

from trivia.core.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080


def validate_port(port: int) -> int:
    """Si el puerto no está entre 1 y 65535 se usa el 8080"""
    if port < 1 or port > 65535:
        logger.warning(f"Invalid port {port}, using default port {DEFAULT_PORT}")
        return DEFAULT_PORT
    return port


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Astro Trivia API server")
    parser.add_argument("--host", default=settings.host, help="Host to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    args = parse_args(argv)
    port = validate_port(args.port)

    logger.info(f"Starting server on {args.host}:{port}")
    uvicorn.run(
        "trivia.main:app",
        host=args.host,
        port=port,
        log_level=settings.log_level.lower(),
        reload=settings.debug
    )


if __name__ == "__main__":
    main()
