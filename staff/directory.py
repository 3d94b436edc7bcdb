"""
Staff directory consumed by the scheduler and the coverage board.

Two backends share one interface: the local ``staff_members`` table, or a
remote directory service reached over HTTP with a bounded timeout. Callers
only ever read from it.
"""
from __future__ import annotations
import logging
from typing import Iterator, List, Optional, Protocol

import httpx
import pydantic
from fastapi import Depends
from sqlalchemy.orm import Session

from core.config_loader import settings
from core.database import get_db
from auth.services.auth_service import get_current_active_user
from .schemas import StaffSchema
from . import service

logger = logging.getLogger(__name__)


class StaffDirectoryError(Exception):
    """The directory could not be reached or sent something unreadable."""


class StaffDirectory(Protocol):
    def get_active_staff(self) -> List[StaffSchema]: ...

    def get_staff(self, staff_id: int) -> Optional[StaffSchema]: ...


class SqlStaffDirectory:
    def __init__(self, db: Session, org_id: int):
        self.db = db
        self.org_id = org_id

    def get_active_staff(self) -> List[StaffSchema]:
        rows = service.get_staff_members(self.db, org_id=self.org_id, active_only=True)
        return [StaffSchema.model_validate(row) for row in rows]

    def get_staff(self, staff_id: int) -> Optional[StaffSchema]:
        row = service.get_staff_member_for_org(self.db, staff_id, self.org_id)
        return StaffSchema.model_validate(row) if row else None


class HttpStaffDirectory:
    """
    Client for an external directory exposing ``GET /staff?active=true`` and
    ``GET /staff/{id}``. Every failure surfaces as StaffDirectoryError; there
    is no retry here.
    """

    def __init__(
        self,
        base_url: str,
        *,
        org_id: int,
        timeout: float = 3.0,
        client: Optional[httpx.Client] = None,
    ):
        self.org_id = org_id
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def _get(self, path: str, params: Optional[dict] = None) -> httpx.Response:
        try:
            return self._client.get(path, params=params, headers={"X-Org-Id": str(self.org_id)})
        except httpx.HTTPError as exc:
            raise StaffDirectoryError(f"staff directory unreachable: {exc}") from exc

    @staticmethod
    def _payload(resp: httpx.Response):
        try:
            resp.raise_for_status()
            return resp.json()
        except (httpx.HTTPStatusError, ValueError) as exc:
            raise StaffDirectoryError(f"staff directory error: {exc}") from exc

    def get_active_staff(self) -> List[StaffSchema]:
        payload = self._payload(self._get("/staff", params={"active": "true"}))
        try:
            return [StaffSchema.model_validate(item) for item in payload]
        except (pydantic.ValidationError, TypeError) as exc:
            raise StaffDirectoryError(f"malformed staff list: {exc}") from exc

    def get_staff(self, staff_id: int) -> Optional[StaffSchema]:
        resp = self._get(f"/staff/{staff_id}")
        if resp.status_code == 404:
            return None
        payload = self._payload(resp)
        try:
            return StaffSchema.model_validate(payload)
        except pydantic.ValidationError as exc:
            raise StaffDirectoryError(f"malformed staff record {staff_id}: {exc}") from exc

    def close(self) -> None:
        self._client.close()


def get_staff_directory(
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
) -> Iterator[StaffDirectory]:
    if settings.STAFF_DIRECTORY_URL:
        directory = HttpStaffDirectory(
            settings.STAFF_DIRECTORY_URL,
            org_id=user.org_id,
            timeout=settings.STAFF_DIRECTORY_TIMEOUT_SECONDS,
        )
        try:
            yield directory
        finally:
            directory.close()
    else:
        yield SqlStaffDirectory(db, user.org_id)
