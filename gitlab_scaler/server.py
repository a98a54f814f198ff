"""
FastAPI application exposing the desired_runners metric.

Routes are plain functions, so each request runs on a threadpool worker
and its GitLab calls block only that worker.
"""

import logging
from typing import Callable

from fastapi import FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse

from gitlab_scaler.config import Config, load_config
from gitlab_scaler.gitlab.client import GitLabClient
from gitlab_scaler.gitlab.exceptions import GitLabAPIError
from gitlab_scaler.main import create_client, metrics_handler


def create_app(config: Config = None,
               client_factory: Callable[[Config], GitLabClient] = create_client) -> FastAPI:
    """
    Create the scaler application.

    Args:
        config: Optional configuration; loaded from the environment when omitted
        client_factory: Builds a GitLab client from the configuration for each request

    Returns:
        FastAPI: The configured application
    """
    config = config or load_config()

    app = FastAPI(title="GitLab Runner Scaler")
    app.state.config = config
    app.state.client_factory = client_factory

    logging.info(f"Scaler configured for {config.gitlab_url}, tag '{config.runner_tag}', "
                 f"{config.pending_jobs_per_runner} pending jobs per runner")

    @app.get("/metrics")
    def metrics():
        try:
            samples = metrics_handler(app.state.config, app.state.client_factory(app.state.config))
        except GitLabAPIError as e:
            logging.error(f"Failed to fetch jobs: {e}", exc_info=True)
            return PlainTextResponse(f"Failed to fetch jobs: {e}", status_code=500)

        return JSONResponse([sample.to_dict() for sample in samples])

    @app.get("/healthz")
    def healthz():
        return PlainTextResponse("ok")

    return app
