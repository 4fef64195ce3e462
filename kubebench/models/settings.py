"""Compiler settings.

Settings are resolved once at startup and handed to the builders, which
never read the environment themselves.
"""

from pydantic import BaseModel, ConfigDict, Field

from kubebench.utils.env import get_env


class ProbeSettings(BaseModel):
    """Readiness probe timing for server workloads."""

    model_config = ConfigDict(frozen=True)

    initial_delay_seconds: int = Field(5, ge=0)
    timeout_seconds: int = Field(2, ge=1)
    period_seconds: int = Field(2, ge=1)


class CompilerSettings(BaseModel):
    """Tunables shared by every builder."""

    model_config = ConfigDict(frozen=True)

    probe: ProbeSettings = Field(default_factory=ProbeSettings)
    job_backoff_limit: int = Field(6, ge=0, description="backoffLimit of built jobs")
    default_namespace: str = Field(
        "default", min_length=1, description="Namespace for definitions without one"
    )

    @classmethod
    def from_env(cls) -> "CompilerSettings":
        """Build settings from KUBEBENCH_* environment variables.

        Raises:
            EnvVarTypeError: If a numeric variable is not an integer.
            pydantic.ValidationError: If a value is out of range.
        """
        defaults = cls()
        probe = ProbeSettings(
            initial_delay_seconds=get_env(
                "KUBEBENCH_PROBE_INITIAL_DELAY",
                default=defaults.probe.initial_delay_seconds,
                as_type=int,
            ),
            timeout_seconds=get_env(
                "KUBEBENCH_PROBE_TIMEOUT",
                default=defaults.probe.timeout_seconds,
                as_type=int,
            ),
            period_seconds=get_env(
                "KUBEBENCH_PROBE_PERIOD",
                default=defaults.probe.period_seconds,
                as_type=int,
            ),
        )
        return cls(
            probe=probe,
            job_backoff_limit=get_env(
                "KUBEBENCH_JOB_BACKOFF_LIMIT",
                default=defaults.job_backoff_limit,
                as_type=int,
            ),
            default_namespace=get_env(
                "KUBEBENCH_DEFAULT_NAMESPACE", default=defaults.default_namespace
            ),
        )
