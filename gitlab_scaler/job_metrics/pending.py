import logging
from typing import Iterable, List, NamedTuple

from gitlab_scaler.gitlab.client import GitLabClient
from gitlab_scaler.gitlab.exceptions import GitLabAPIError
from gitlab_scaler.models import Job


class SkippedRunner(NamedTuple):
    runner_id: int
    error: str


class PendingJobCount(NamedTuple):
    """Result of one aggregation pass over the runners."""
    count: int
    skipped: List[SkippedRunner]


def count_tagged(jobs: Iterable[Job], tag: str) -> int:
    """Count jobs whose tag set contains the tag exactly (case-sensitive)."""
    return sum(1 for job in jobs if tag in job.tags)


def count_matching_pending_jobs(client: GitLabClient, tag: str) -> PendingJobCount:
    """
    Count pending jobs carrying the given tag across all runners.

    A failure listing runners is raised to the caller. A failure listing one
    runner's jobs is logged and that runner is skipped; the other runners
    still contribute to the count.

    Args:
        client: GitLab API client
        tag: Runner tag a job must carry to be counted

    Returns:
        PendingJobCount: Total matching jobs and the runners that were skipped

    Raises:
        GitLabAPIError: If the runner list cannot be fetched
    """
    runners = client.list_runners()
    logging.debug(f"Found {len(runners)} runners")

    count = 0
    skipped = []
    for runner in runners:
        try:
            jobs = client.list_pending_jobs(runner.id)
        except GitLabAPIError as e:
            logging.warning(f"Skipping runner {runner.id}: failed to fetch pending jobs: {e}")
            skipped.append(SkippedRunner(runner_id=runner.id, error=str(e)))
            continue

        matching = count_tagged(jobs, tag)
        logging.debug(f"Runner {runner.id}: {len(jobs)} pending jobs, {matching} tagged '{tag}'")
        count += matching

    return PendingJobCount(count=count, skipped=skipped)


def count_pinned_runner_jobs(client: GitLabClient, runner_id: int, tag: str) -> PendingJobCount:
    """
    Count pending jobs for a single, explicitly configured runner.

    With an empty tag every pending job of the runner counts. Failures are
    raised since this runner is the only source of data.
    """
    jobs = client.list_pending_jobs(runner_id)
    count = count_tagged(jobs, tag) if tag else len(jobs)
    return PendingJobCount(count=count, skipped=[])
