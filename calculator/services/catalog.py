"""Catalog collaborators used by the recommendation engine.

``get_components(category, filters)`` returns candidate parts in the
catalog's own relevance order. Recognized filters: ``budget`` (max lowest
price), ``purpose`` (comma-joined usage tags), ``minBenchmark`` and
``benchmark`` (which benchmark kind ``minBenchmark`` applies to).
"""
import logging
from abc import ABC, abstractmethod
from typing import List

import requests
from django.db import DatabaseError
from django.utils.module_loading import import_string

from hardware.categories import parse_category
from hardware.parts import InvalidPartError, Part
from hardware.queries import catalog_parts

from ..conf import engine_setting

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """The catalog could not answer a lookup."""


class CatalogService(ABC):
    @abstractmethod
    def get_components(self, category, filters=None) -> List[Part]:
        raise NotImplementedError


class DatabaseCatalog(CatalogService):
    """Catalog backed by ``hardware.models.Component`` rows."""

    def get_components(self, category, filters=None) -> List[Part]:
        category = parse_category(category)
        try:
            return catalog_parts(category, filters)
        except DatabaseError as exc:
            raise CatalogError(f"Catalog query for {category.value} failed: {exc}")


class HttpCatalog(CatalogService):
    """Client for a remote catalog serving ``GET /components/<category>``."""

    def __init__(self, base_url=None, api_key=None, timeout=None, session=None):
        self.base_url = (base_url or engine_setting("CATALOG_API_URL") or "").rstrip("/")
        self.api_key = api_key if api_key is not None else engine_setting("CATALOG_API_KEY")
        self.timeout = timeout or engine_setting("CATALOG_TIMEOUT")
        self.session = session or requests

    def _query(self, filters) -> dict:
        params = {}
        for key, value in (filters or {}).items():
            if value is None:
                continue
            if isinstance(value, (list, tuple, set)):
                value = ",".join(str(v) for v in value)
            params[key] = str(value)
        return params

    def get_components(self, category, filters=None) -> List[Part]:
        category = parse_category(category)
        if not self.base_url:
            raise CatalogError("CATALOG_API_URL is not configured")
        url = f"{self.base_url}/components/{category.value}/"
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            resp = self.session.get(
                url, params=self._query(filters), headers=headers, timeout=self.timeout
            )
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as exc:
            raise CatalogError(f"Catalog request for {category.value} failed: {exc}")
        except ValueError as exc:
            raise CatalogError(f"Catalog returned invalid JSON for {category.value}: {exc}")

        if isinstance(payload, dict):
            payload = payload.get("results", [])
        if not isinstance(payload, list):
            raise CatalogError(f"Unexpected catalog payload for {category.value}")
        parts = []
        for doc in payload:
            if not isinstance(doc, dict):
                raise CatalogError(f"Unexpected catalog entry for {category.value}")
            try:
                parts.append(Part.from_dict({"type": category.value, **doc}))
            except InvalidPartError as exc:
                raise CatalogError(f"Catalog returned a malformed {category.value}: {exc}")
        return parts


def get_catalog() -> CatalogService:
    backend = engine_setting("CATALOG_BACKEND")
    if isinstance(backend, CatalogService):
        return backend
    cls = import_string(backend) if isinstance(backend, str) else backend
    logger.debug("Using catalog backend %s", cls.__name__)
    return cls()
