"""Entry point for running the game via ``python -m tictactoe``."""

from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:
    """Start the FastAPI-powered tic-tac-toe web server."""

    level = os.environ.get("TICTACTOE_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s: %(message)s",
    )
    host = os.environ.get("TICTACTOE_HOST", "0.0.0.0")
    port = int(os.environ.get("TICTACTOE_PORT", "8000"))
    uvicorn.run("tictactoe.ui:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
