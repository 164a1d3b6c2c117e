"""Serve the ledger API with uvicorn.

Host and port come from POCKETLEDGER_HOST / POCKETLEDGER_PORT; the backend
and data directory from the usual POCKETLEDGER_* settings.
"""
import os

import uvicorn

from pocketledger.config.settings import get_settings
from pocketledger.main import app


def main() -> None:
    settings = get_settings()
    host = os.environ.get("POCKETLEDGER_HOST", "127.0.0.1")
    port = int(os.environ.get("POCKETLEDGER_PORT", "8001"))
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
