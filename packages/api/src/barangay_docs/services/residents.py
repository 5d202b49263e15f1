# This project was developed with assistance from AI tools.
"""Resident registry client.

The registry owns resident identity and address data. The engine reads a
display summary once, at submission, and never writes back.
"""

import logging
from typing import Protocol

import httpx
from pydantic import BaseModel

from ..core.config import settings
from .errors import InfrastructureError, NotFoundError

logger = logging.getLogger(__name__)


class ResidentSummary(BaseModel):
    """Display snapshot of a resident at submission time."""

    name: str
    address: str | None = None
    contact_number: str | None = None


class ResidentDirectory(Protocol):
    async def get_resident_summary(self, resident_id: int) -> ResidentSummary: ...


def _compose_name(record: dict) -> str:
    if record.get("name"):
        return str(record["name"]).strip()
    parts = [
        record.get("first_name"),
        record.get("middle_name"),
        record.get("last_name"),
        record.get("suffix"),
    ]
    return " ".join(str(p).strip() for p in parts if p and str(p).strip())


def parse_resident(payload: dict) -> ResidentSummary:
    """Build a summary from a registry response.

    Accepts either the bare resident object or a ``{"data": {...}}`` envelope.
    """
    record = payload.get("data", payload) if isinstance(payload, dict) else {}
    if not isinstance(record, dict):
        record = {}
    return ResidentSummary(
        name=_compose_name(record),
        address=record.get("address") or record.get("complete_address"),
        contact_number=record.get("contact_number") or record.get("mobile_number"),
    )


class HttpResidentDirectory:
    """Looks residents up over the registry's REST API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def get_resident_summary(self, resident_id: int) -> ResidentSummary:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(f"/api/residents/{resident_id}")
        except httpx.HTTPError as exc:
            logger.error("Resident registry unreachable at %s: %s", self.base_url, exc)
            raise InfrastructureError("Resident registry is unavailable") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError("Resident", resident_id)
        if response.is_error:
            logger.error(
                "Resident registry returned %s for resident %s",
                response.status_code,
                resident_id,
            )
            raise InfrastructureError("Resident registry is unavailable")

        try:
            payload = response.json()
        except ValueError as exc:
            raise InfrastructureError("Resident registry returned malformed JSON") from exc

        summary = parse_resident(payload)
        if not summary.name:
            raise InfrastructureError(f"Resident registry returned no name for {resident_id}")
        return summary


_directory: ResidentDirectory | None = None


def get_resident_directory() -> ResidentDirectory:
    """FastAPI dependency: the process-wide registry client."""
    global _directory  # noqa: PLW0603
    if _directory is None:
        _directory = HttpResidentDirectory(
            settings.RESIDENT_REGISTRY_URL,
            timeout=settings.RESIDENT_REGISTRY_TIMEOUT,
        )
    return _directory


def log_registry_status() -> None:
    """Log the registry target. Call at startup."""
    logger.info("Resident registry: %s", settings.RESIDENT_REGISTRY_URL)
