"""Map observed workload state onto a definition's status.

The reconcile loop reads the benchmark's completion job (see
CompiledBenchmark.completion_job) or server deployment from the cluster and
passes it here. Missing or partial observations never flip a flag: the
previous status is returned unchanged.
"""

from typing import Any

from kubernetes import client

from kubebench.models.definition_models import BenchmarkStatus


def _condition_true(conditions: list[Any] | None, condition_type: str) -> bool:
    return any(
        c.type == condition_type and c.status == "True" for c in conditions or []
    )


def _from_job(job: client.V1Job, previous: BenchmarkStatus) -> BenchmarkStatus:
    status = job.status
    if (
        status.active is None
        and status.succeeded is None
        and status.failed is None
        and not status.conditions
    ):
        return previous

    completions = (job.spec.completions if job.spec else None) or 1
    completed = _condition_true(status.conditions, "Complete") or (
        (status.succeeded or 0) >= completions
    )
    failed = _condition_true(status.conditions, "Failed")
    running = (status.active or 0) > 0 and not completed and not failed
    return BenchmarkStatus(running=running, completed=completed)


def _from_deployment(
    deployment: client.V1Deployment, previous: BenchmarkStatus
) -> BenchmarkStatus:
    status = deployment.status
    if status.replicas is None and status.ready_replicas is None:
        return previous
    running = (status.replicas or 0) > 0
    return BenchmarkStatus(running=running, completed=previous.completed)


def derive_status(
    observed: client.V1Job | client.V1Deployment | None,
    previous: BenchmarkStatus | None = None,
) -> BenchmarkStatus:
    """Derive Running/Completed from an observed Job or Deployment.

    Args:
        observed: Workload as read from the cluster, or None if it was not
            found or not yet observed.
        previous: Status currently reported on the definition.

    Returns:
        The new status; ``previous`` itself when nothing can be concluded.

    Raises:
        TypeError: If ``observed`` is neither a Job nor a Deployment.
    """
    previous = previous or BenchmarkStatus()
    if observed is None or observed.status is None:
        return previous
    if isinstance(observed, client.V1Job):
        return _from_job(observed, previous)
    if isinstance(observed, client.V1Deployment):
        return _from_deployment(observed, previous)
    raise TypeError(f"Cannot derive status from {type(observed).__name__}")


def status_patch(status: BenchmarkStatus) -> dict[str, Any]:
    """Merge patch body for the definition's status subresource."""
    return {"status": status.model_dump(by_alias=True)}
