import os

import uvicorn

from stepwise.logger import setup_logging


def main():
    """Main entry point for the Stepwise web service."""
    setup_logging()

    reload_enabled = os.getenv("STEPWISE_RELOAD", "0").lower() in {"1", "true", "yes"}
    host = os.getenv("STEPWISE_HOST", "0.0.0.0")
    port = int(os.getenv("STEPWISE_PORT", "8010"))

    uvicorn.run(
        "web.backend.app:app",
        host=host,
        port=port,
        reload=reload_enabled,
        reload_dirs=["web", "stepwise"] if reload_enabled else None,
    )


if __name__ == "__main__":
    main()
