"""
Process entry point for container deployments.
"""

import uvicorn

from gitlab_scaler.common.logger import setup_logging
from gitlab_scaler.config import load_config
from gitlab_scaler.server import create_app


def build_app(environ=None):
    """
    Load configuration once, configure logging from it and build the application.

    Args:
        environ: Optional mapping to read instead of os.environ

    Returns:
        FastAPI: The configured application
    """
    config = load_config(environ)

    # Configure logging first
    setup_logging(config.log_level)

    return create_app(config)


# ASGI application, also usable as "scaler_server:app" with any ASGI server
app = build_app()


def main():
    """Serve the scaler on all interfaces at the configured port."""
    uvicorn.run(app, host="0.0.0.0", port=app.state.config.port, log_config=None)


if __name__ == "__main__":
    main()
