"""
MindLoom Server Entry Point

Run with: python main.py (or the `mindloom` console script)
Or with uvicorn: uvicorn app:app --reload

Bind address, port and reload come from MINDLOOM_SERVER_* variables.
"""

import uvicorn

from src.config import Config


def main() -> None:
    """Start the API server with settings from the environment."""
    server = Config.from_env().server

    uvicorn.run(
        "app:app",
        host=server.host,
        port=server.port,
        reload=server.reload,
        log_level=server.log_level,
    )


if __name__ == "__main__":
    main()
