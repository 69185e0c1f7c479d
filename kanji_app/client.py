"""
Client side of the kanji app: an HTTP wrapper around the backend and the
view state behind the list/detail browser.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .errors import ApiError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001"
UNLEVELED = "Unleveled"

LIST_ERROR = "Failed to load Kanji list. Is the backend running and data seeded?"

NEXT_KEYS = ("ArrowRight", " ")
PREVIOUS_KEYS = ("ArrowLeft",)


class KanjiApiClient:
    """Thin wrapper over the two GET endpoints."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, session: Optional[Any] = None, timeout: float = 10) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ApiError(f"GET {url} failed: {e}") from e
        if response.status_code >= 400:
            raise ApiError(f"GET {url} returned {response.status_code}", status=response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"GET {url} returned invalid JSON", status=response.status_code) from e

    def list_kanji(self) -> List[Dict[str, Any]]:
        return self._get("/api/kanji")

    def get_kanji(self, character: str) -> Dict[str, Any]:
        return self._get(f"/api/kanji/{quote(character, safe='')}")


def group_by_level(records: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """Partition records by level, keeping first-appearance order of levels and records."""
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for record in records:
        groups.setdefault(record.get("level") or UNLEVELED, []).append(record)
    return groups


class KanjiBrowser:
    """
    View state for the sidebar/detail browser.

    ``list_status`` goes loading -> loaded | error once per ``load()``.
    ``detail_status`` goes None -> loading -> loaded | error for each fetch.
    Nothing is cached: every selection hits the API again.
    """

    def __init__(self, api: Any, grouped: bool = False) -> None:
        self.api = api
        self.grouped = grouped
        self.records: List[Dict[str, Any]] = []
        self.groups: Dict[str, List[Dict[str, Any]]] = {}
        self.list_status = "loading"
        self.detail_status: Optional[str] = None
        self.selected: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None
        self.current_level: Optional[str] = None

    @property
    def detail_loading(self) -> bool:
        return self.detail_status == "loading"

    @property
    def levels(self) -> List[str]:
        return list(self.groups)

    def load(self) -> None:
        self.list_status = "loading"
        self.error = None
        try:
            self.records = list(self.api.list_kanji())
        except ApiError as e:
            logger.error("Error fetching kanji list: %s", e)
            self.records = []
            self.groups = {}
            self.list_status = "error"
            self.error = LIST_ERROR
            return
        self.groups = group_by_level(self.records)
        self.list_status = "loaded"

    def select(self, character: str) -> None:
        """Open a kanji, or close it if it is the one already shown."""
        if self.detail_loading:
            return
        if self.selected is not None and self.selected.get("kanji") == character:
            self.selected = None
            self.detail_status = None
            return
        self._show(character)

    def _show(self, character: str) -> None:
        self.detail_status = "loading"
        self.error = None
        try:
            self.selected = self.api.get_kanji(character)
        except ApiError as e:
            logger.error("Error fetching details for kanji %s: %s", character, e)
            self.selected = None
            self.detail_status = "error"
            self.error = f"Failed to load details for {character}."
            return
        self.detail_status = "loaded"
        self.current_level = self._level_of(character)

    def _level_of(self, character: str) -> Optional[str]:
        for level, members in self.groups.items():
            if any(r.get("kanji") == character for r in members):
                return level
        return None

    def select_level(self, level: str) -> None:
        """Jump to the first kanji of a level group."""
        members = self.groups.get(level)
        if not members or self.detail_loading:
            return
        self.current_level = level
        self._show(members[0]["kanji"])

    def _step(self, offset: int) -> None:
        if not self.grouped or self.selected is None or self.detail_loading:
            return
        members = self.groups.get(self.current_level or "", [])
        characters = [r.get("kanji") for r in members]
        if self.selected.get("kanji") not in characters:
            return
        index = characters.index(self.selected.get("kanji"))
        self._show(characters[(index + offset) % len(characters)])

    def next(self) -> None:
        self._step(1)

    def previous(self) -> None:
        self._step(-1)

    def handle_key(self, key: str) -> None:
        if key in NEXT_KEYS:
            self.next()
        elif key in PREVIOUS_KEYS:
            self.previous()
