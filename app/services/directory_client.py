"""
HTTP client for the seating and voting API.

Used by the attendee lookup flow (which searches a snapshot taken at load
time) and as the store behind ``LayoutEditor.save``. Requests are never
retried; failures surface as application errors and leave local state alone.
"""

import logging
import time
from typing import Callable, Iterator, List, Optional

import httpx

from app.core.config import settings
from app.core.errors import AppError, PersistenceError, error_from_status
from app.schemas.photo import PhotoResponse, VotingStatus
from app.schemas.seating import SeatReference, TableSchema
from app.services.fortune_service import FALLBACK_TEXT
from app.services.seating_service import SeatingService

logger = logging.getLogger(__name__)

NETWORK_FALLBACK_TEXT = "新年快乐！愿你2025年好运连连！(网络错误)"


class SeatDirectoryClient:
    """Thin synchronous client over the JSON API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        admin_token: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        headers = {}
        if admin_token:
            headers["Authorization"] = f"Bearer {admin_token}"
        self._client = client or httpx.Client(base_url=base_url or settings.BASE_URL, timeout=timeout)
        self._client.headers.update(headers)
        self.snapshot: Optional[List[TableSchema]] = None

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise PersistenceError(f"Request to {url} failed: {e}") from e

        if response.is_success:
            return response

        message = response.reason_phrase
        error_code = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("error") or body.get("detail") or body.get("text") or message
            error_code = body.get("error_code")
        raise error_from_status(response.status_code, str(message), error_code)

    # -- seat directory --

    def fetch_tables(self) -> List[TableSchema]:
        """Load the directory and keep it as the lookup snapshot"""
        response = self._request("GET", "/api/tables")
        self.snapshot = SeatingService.parse_tables(response.json())
        return self.snapshot

    def find_seat(self, name: str) -> SeatReference:
        """Look ``name`` up in the load-time snapshot"""
        if self.snapshot is None:
            self.fetch_tables()
        return SeatingService.find_seat(self.snapshot, name)

    def save_tables(self, tables: List[TableSchema]) -> None:
        """Full-replace save of the layout"""
        payload = [table.model_dump(by_alias=True) for table in tables]
        try:
            self._request("POST", "/api/tables", json=payload)
        except AppError as e:
            if isinstance(e, PersistenceError):
                raise
            raise PersistenceError(f"Save failed: {e.message}") from e
        self.snapshot = list(tables)

    # -- fortune --

    def fortune(self, name: str, table_name: str) -> str:
        try:
            response = self._request("POST", "/api/fortune", json={"name": name, "tableName": table_name})
        except PersistenceError as e:
            logger.error(f"Error getting fortune: {e}")
            return NETWORK_FALLBACK_TEXT
        except AppError as e:
            logger.error(f"Error getting fortune: {e}")
            return FALLBACK_TEXT
        return response.json().get("text") or FALLBACK_TEXT

    # -- photos & voting --

    def list_photos(self) -> List[PhotoResponse]:
        response = self._request("GET", "/api/photos")
        return [PhotoResponse.model_validate(item) for item in response.json()]

    def vote(self, photo_id: str) -> Optional[PhotoResponse]:
        """Vote once; ConflictError when already voted, VotingClosedError when closed"""
        response = self._request("POST", f"/api/photos/{photo_id}/vote")
        photo = response.json().get("photo")
        return PhotoResponse.model_validate(photo) if photo else None

    def get_voting_status(self) -> VotingStatus:
        return VotingStatus.model_validate(self._request("GET", "/api/voting/status").json())

    def set_voting_status(self, voting_enabled: Optional[bool] = None, voting_stopped: Optional[bool] = None) -> VotingStatus:
        payload = {}
        if voting_enabled is not None:
            payload["votingEnabled"] = voting_enabled
        if voting_stopped is not None:
            payload["votingStopped"] = voting_stopped
        response = self._request("POST", "/api/voting/status", json=payload)
        return VotingStatus.model_validate(response.json())

    def watch_photos(
        self,
        interval: Optional[float] = None,
        should_stop: Callable[[], bool] = lambda: False,
        sleep: Callable[[float], None] = time.sleep,
    ) -> Iterator[List[PhotoResponse]]:
        """Poll the photo list while the voting view is open.

        A failed poll is logged and skipped; the next tick tries again.
        """
        interval = settings.PHOTO_POLL_INTERVAL_SECONDS if interval is None else interval
        while not should_stop():
            try:
                yield self.list_photos()
            except AppError as e:
                logger.error(f"Failed to fetch photos: {e}")
            if should_stop():
                break
            sleep(interval)
