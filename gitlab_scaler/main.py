import logging
from typing import List

from gitlab_scaler.config import Config
from gitlab_scaler.gitlab.client import GitLabClient
from gitlab_scaler.job_metrics.pending import (
    PendingJobCount,
    count_matching_pending_jobs,
    count_pinned_runner_jobs,
)
from gitlab_scaler.models import MetricSample
from gitlab_scaler.scaler import calculate_desired_replicas


def create_client(config: Config) -> GitLabClient:
    """Build a GitLab client for a single request."""
    return GitLabClient(config.gitlab_url, config.gitlab_token)


def get_pending_jobs(client: GitLabClient, config: Config) -> PendingJobCount:
    """
    Get the pending job count from every runner, or from the pinned runner.

    Args:
        client: GitLab API client
        config: Configuration object

    Returns:
        PendingJobCount: Matching pending jobs and any skipped runners

    Raises:
        GitLabAPIError: If the data needed for the count cannot be fetched
    """
    if config.runner_id is not None:
        result = count_pinned_runner_jobs(client, config.runner_id, config.runner_tag)
    else:
        result = count_matching_pending_jobs(client, config.runner_tag)

    if result.skipped:
        skipped_ids = ', '.join(str(s.runner_id) for s in result.skipped)
        logging.warning(f"Pending job count is partial, skipped runners: {skipped_ids}")

    return result


def metrics_handler(config: Config, client: GitLabClient) -> List[MetricSample]:
    """
    Compute the desired_runners metric for one metrics request.

    Args:
        config: Configuration object
        client: GitLab API client

    Returns:
        list: A single desired_runners MetricSample

    Raises:
        GitLabAPIError: If the pending job count cannot be computed
    """
    pending = get_pending_jobs(client, config)
    desired_replicas = calculate_desired_replicas(pending.count, config.pending_jobs_per_runner)

    logging.info(f"Pending jobs: {pending.count}, Desired runners: {desired_replicas}")

    return [MetricSample(value=desired_replicas)]
