"""
Launch the resume analysis API locally.

Run `python run_server_local.py` and open the Swagger UI at
`http://localhost:8000/docs`. HOST, PORT and RELOAD can be overridden in `.env`.
"""
import os
import signal
import sys

import uvicorn
from dotenv import load_dotenv

from ats_scanner.logging import LoggerFactory

load_dotenv()

logger = LoggerFactory().get_logger(name="local_server")


def build_server() -> uvicorn.Server:
    config = uvicorn.Config(
        "api.server:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "true").lower() == "true",
    )
    return uvicorn.Server(config)


def main():
    server = build_server()

    def request_shutdown(sig, frame):
        logger.info(f"Received signal {sig}, shutting down API server")
        server.should_exit = True

    signal.signal(signal.SIGINT, request_shutdown)
    signal.signal(signal.SIGTERM, request_shutdown)

    logger.info(f"Starting API server on {server.config.host}:{server.config.port}")
    server.run()
    logger.info("API server stopped")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
