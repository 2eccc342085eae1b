# linkpage/modules/icons/service.py
import logging
from typing import Any, Dict, List, Optional

import requests
from requests_oauthlib import OAuth1

from ...core.errors import NotConfigured, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.thenounproject.com"
MAX_BODY_IN_ERROR = 2000


class NounProjectService:
    """Icon search against the Noun Project API (OAuth 1.0a, HMAC-SHA1 signed)"""

    def __init__(self, api_key: str = None, api_secret: str = None,
                 base_url: str = DEFAULT_API_URL, timeout: float = 10,
                 session: Optional[requests.Session] = None):
        self.api_key = (api_key or "").strip()
        self.api_secret = (api_secret or "").strip()
        self.base_url = (base_url or DEFAULT_API_URL).rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self):
        """Close the HTTP session if this service created it"""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_secret)

    def _auth(self) -> OAuth1:
        return OAuth1(self.api_key, client_secret=self.api_secret)

    def search(self, query: str, limit: int = 20) -> List[Dict[str, Any]]:
        """
        Search icons by free-text term

        Args:
            query: Search term
            limit: Maximum number of results

        Returns:
            Flattened result dicts: id, term, previewUrl, thumbnailUrl, attribution, tags

        Raises:
            NotConfigured: API key or secret missing (no request is made)
            UpstreamError: network failure or non-2xx response
        """
        if not self.is_configured:
            raise NotConfigured()

        url = f"{self.base_url}/v2/icon"
        try:
            response = self.session.get(
                url,
                params={"query": query, "limit": limit},
                auth=self._auth(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(upstream_status=None, upstream_body=str(e))

        # The API answers 404 when nothing matches
        if response.status_code == 404:
            return []

        if not 200 <= response.status_code < 300:
            raise UpstreamError(
                upstream_status=response.status_code,
                upstream_body=response.text[:MAX_BODY_IN_ERROR],
            )

        try:
            payload = response.json()
        except ValueError:
            raise UpstreamError(
                message="Icon search service returned an unreadable response",
                upstream_status=response.status_code,
                upstream_body=response.text[:MAX_BODY_IN_ERROR],
            )

        icons = payload.get("icons", []) if isinstance(payload, dict) else []
        results = [self._flatten_icon(icon) for icon in icons if isinstance(icon, dict)]
        logger.debug(f"Icon search '{query}' returned {len(results)} results")
        return results

    @staticmethod
    def _flatten_tags(tags) -> List[str]:
        flattened = []
        for tag in tags or []:
            if isinstance(tag, dict):
                tag = tag.get("slug") or tag.get("name")
            if tag:
                flattened.append(str(tag))
        return flattened

    def _flatten_icon(self, icon: Dict[str, Any]) -> Dict[str, Any]:
        thumbnail_url = (
            icon.get("thumbnail_url")
            or icon.get("preview_url_84")
            or icon.get("preview_url")
            or ""
        )
        return {
            "id": str(icon.get("id", "")),
            "term": icon.get("term") or "",
            "previewUrl": icon.get("preview_url") or thumbnail_url,
            "thumbnailUrl": thumbnail_url,
            "attribution": icon.get("attribution") or "",
            "tags": self._flatten_tags(icon.get("tags")),
        }
