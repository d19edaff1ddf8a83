"""Abstract repository for Job aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bazaar.domain.model.job import Job, JobStatus


class JobRepository(ABC):

    @abstractmethod
    def add(self, job: Job) -> Job:
        """Persist a new job, assigning its ID."""

    @abstractmethod
    def get_by_id(self, job_id: int) -> Job | None:
        """Return a job by its ID, or None if not found."""

    @abstractmethod
    def update_if_status(self, job: Job, expected: JobStatus) -> bool:
        """Write ``job`` only if the stored status is still ``expected``."""

    @abstractmethod
    def list_by_seller(self, seller_id: str) -> list[Job]:
        """Return every job requested from a seller."""

    @abstractmethod
    def list_by_buyer(self, buyer_id: str) -> list[Job]:
        """Return every job requested by a buyer."""
