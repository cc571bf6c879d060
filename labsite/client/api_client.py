"""HTTP client for the website API with a short-lived read cache.

Usage::

    client = LabsiteClient("http://localhost:8000")
    members = client.team_members.get_all()
    client.publications.create({"title": ..., "authors": ..., "journal": ..., "year": 2024})

Any object with a ``requests``-style ``request(method, url, json=, params=)``
method can be passed as ``session`` (a ``requests.Session`` by default).
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

import requests

from labsite.client.cache import EntityCache, Item
from labsite.config import Settings, get_settings
from labsite.errors import ApiError

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 5.0


class LabsiteClient:
    """Entry point: one ``EntityApi`` per collection plus the special endpoints."""

    def __init__(
        self,
        base_url: str = "",
        session: Optional[Any] = None,
        cache_ttl: float = DEFAULT_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.cache = EntityCache(ttl=cache_ttl, clock=clock)

        self.team_members = EntityApi(self, "team-members")
        self.publications = EntityApi(self, "publications")
        self.patents = EntityApi(self, "patents")
        self.projects = EntityApi(self, "projects")
        self.news = EntityApi(self, "news")
        self.research_areas = EntityApi(self, "research-areas")
        self.research_directions = EntityApi(self, "research-directions")
        self.research_features = EntityApi(self, "research-features")
        self.todos = EntityApi(self, "todos")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, session: Optional[Any] = None) -> "LabsiteClient":
        settings = settings or get_settings()
        return cls(settings.API_BASE_URL, session=session, cache_ttl=settings.CACHE_TTL_SECONDS)

    # -- transport -------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        resp = self.session.request(method, self._url(path), json=json, params=params)
        if resp.status_code >= 400:
            raise ApiError(resp.status_code, _error_message(resp))
        return resp.json()

    # -- special endpoints -----------------------------------------------------

    def dashboard(self) -> dict[str, Any]:
        return self.request("GET", "/api/dashboard")

    def background_images(self) -> list[str]:
        return self.request("GET", "/api/background-images")["images"]

    def toggle_todo(self, todo_id: int) -> Item:
        item = self.request("PATCH", f"/api/todos/{todo_id}/toggle")
        self.cache.replace("todos", item)
        return item

    def login(self, username: str, password: str) -> Optional[Item]:
        """Return the user on valid credentials, ``None`` on 401."""
        try:
            return self.request(
                "POST", "/api/auth/login", json={"username": username, "password": password}
            )
        except ApiError as exc:
            if exc.status_code == 401:
                return None
            raise


class EntityApi:
    """get_all / get_by_id / create / update / delete for one collection."""

    def __init__(self, client: LabsiteClient, entity: str):
        self._client = client
        self.entity = entity
        self.path = f"/api/{entity}"

    @property
    def _cache(self) -> EntityCache:
        return self._client.cache

    def get_all(self, force_refresh: bool = False) -> list[Item]:
        if not force_refresh:
            cached = self._cache.fresh(self.entity)
            if cached is not None:
                return cached
        items = self._client.request("GET", self.path)
        self._cache.store(self.entity, items)
        logger.debug(f"Fetched {len(items)} {self.entity}")
        return items

    def get_by_id(self, item_id: int) -> Optional[Item]:
        cached = self._cache.find(self.entity, item_id)
        if cached is not None:
            return cached
        try:
            return self._client.request("GET", f"{self.path}/{item_id}")
        except ApiError as exc:
            if exc.status_code == 404:
                return None
            raise

    def create(self, data: dict[str, Any]) -> Item:
        item = self._client.request("POST", self.path, json=data)
        self._cache.append(self.entity, item)
        return item

    def update(self, item_id: int, patch: dict[str, Any]) -> Item:
        item = self._client.request("PATCH", f"{self.path}/{item_id}", json=patch)
        self._cache.replace(self.entity, item)
        return item

    def delete(self, item_id: int) -> bool:
        result = self._client.request("DELETE", f"{self.path}/{item_id}")
        success = bool(result.get("success"))
        if success:
            self._cache.remove(self.entity, item_id)
        return success

    def invalidate(self) -> None:
        self._cache.invalidate(self.entity)


def _error_message(resp: Any) -> Optional[str]:
    try:
        body = resp.json()
    except ValueError:
        return None
    return body.get("error") if isinstance(body, dict) else None
