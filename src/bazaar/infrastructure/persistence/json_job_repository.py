"""JSON-file-backed implementation of JobRepository."""

from __future__ import annotations

from pathlib import Path

from bazaar.domain.model.job import BudgetRange, Job, JobStatus
from bazaar.domain.repository.job_repository import JobRepository
from bazaar.infrastructure.persistence.json_store import (
    JsonFileStore,
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
    next_id,
)

_STAMPS = (
    "created_at",
    "quoted_at",
    "accepted_at",
    "started_at",
    "completed_at",
    "cancelled_at",
    "rejected_at",
    "disputed_at",
)


class JsonJobRepository(JobRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    def add(self, job: Job) -> Job:
        with self._store.transaction() as records:
            job.id = next_id(records)
            records.append(self._to_raw(job))
        return job

    def get_by_id(self, job_id: int) -> Job | None:
        for raw in self._store.read():
            if raw["id"] == job_id:
                return self._to_domain(raw)
        return None

    def update_if_status(self, job: Job, expected: JobStatus) -> bool:
        with self._store.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == job.id:
                    if raw["status"] != expected.value:
                        return False
                    records[i] = self._to_raw(job)
                    return True
        return False

    def list_by_seller(self, seller_id: str) -> list[Job]:
        return [self._to_domain(r) for r in self._store.read() if r["seller_id"] == seller_id]

    def list_by_buyer(self, buyer_id: str) -> list[Job]:
        return [self._to_domain(r) for r in self._store.read() if r["buyer_id"] == buyer_id]

    @staticmethod
    def _to_raw(job: Job) -> dict:
        raw = {
            "id": job.id,
            "buyer_id": job.buyer_id,
            "seller_id": job.seller_id,
            "service_id": job.service_id,
            "title": job.title,
            "description": job.description,
            "location": job.location,
            "budget_min": money_to_raw(job.budget.minimum),
            "budget_max": money_to_raw(job.budget.maximum),
            "quoted_price": money_to_raw(job.quoted_price),
            "final_price": money_to_raw(job.final_price),
            "status": job.status.value,
            "cancellation_reason": job.cancellation_reason,
        }
        for stamp in _STAMPS:
            raw[stamp] = dt_to_raw(getattr(job, stamp))
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> Job:
        return Job(
            id=raw["id"],
            buyer_id=raw["buyer_id"],
            seller_id=raw["seller_id"],
            service_id=raw.get("service_id"),
            title=raw["title"],
            description=raw.get("description"),
            location=raw.get("location"),
            budget=BudgetRange(
                minimum=money_from_raw(raw.get("budget_min")),
                maximum=money_from_raw(raw.get("budget_max")),
            ),
            quoted_price=money_from_raw(raw.get("quoted_price")),
            final_price=money_from_raw(raw.get("final_price")),
            status=JobStatus(raw["status"]),
            cancellation_reason=raw.get("cancellation_reason"),
            **{stamp: dt_from_raw(raw.get(stamp)) for stamp in _STAMPS},
        )
