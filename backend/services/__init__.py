from .runner import job_runner
from .store import job_store

__all__ = ["job_store", "job_runner"]
