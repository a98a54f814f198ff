import logging


def calculate_desired_replicas(pending_jobs, jobs_per_runner):
    """
    Calculate the desired runner count from the number of pending jobs.

    One runner is always kept warm. Above zero the count is the floored
    quotient plus one, so exactly jobs_per_runner pending jobs already asks
    for two runners.
    """
    if pending_jobs == 0:
        return 1

    desired_replicas = (pending_jobs // jobs_per_runner) + 1
    logging.debug(f"Calculated desired replicas with pending_jobs={pending_jobs}, "
                  f"jobs_per_runner={jobs_per_runner}: {desired_replicas}")
    return desired_replicas
