"""
Parse REST transport - the "restapi" adapter behind Model.sync / Collection.sync.

One RestApiSync is built per class from its RequestConfig. It maps the model
lifecycle onto Parse endpoints:

- read     GET    {URL}             (collection, options["data"] as params)
- read     GET    {URL}/{objectId}  (single model)
- create   POST   {URL}
- update   PUT    {URL}/{objectId}
- delete   DELETE {URL}/{objectId}

Nested models in a request body are sent as Pointers.
"""

import requests
from typing import Dict, Any, Optional

from .config import RequestConfig


class RestApiSync:
    """Transport for one Parse class."""

    def __init__(self, config: RequestConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.debug = config.debug
        self._session = session or requests.Session()

    def url_for(self, target) -> str:
        record_id = getattr(target, "id", None)
        if record_id:
            return f"{self.config.url}/{record_id}"
        return self.config.url

    def read(self, target, options: Optional[Dict] = None) -> Any:
        """GET a single record or, for a collection, the class listing.

        options["data"] is sent as query parameters (e.g. {"where": "..."}).
        """
        options = options or {}
        url = self.url_for(target)

        if self.debug:
            print(f"  GET {url} {options.get('data') or ''}")

        response = self._session.get(url, headers=self.config.headers, params=options.get("data"))
        response.raise_for_status()
        return response.json()

    def create(self, model, options: Optional[Dict] = None) -> Dict[str, Any]:
        url = self.config.url

        if self.debug:
            print(f"  POST {url}")

        response = self._session.post(url, headers=self.config.headers, json=self._body(model))
        response.raise_for_status()
        return response.json()

    def update(self, model, options: Optional[Dict] = None) -> Dict[str, Any]:
        url = self.url_for(model)

        if self.debug:
            print(f"  PUT {url}")

        response = self._session.put(url, headers=self.config.headers, json=self._body(model))
        response.raise_for_status()
        return response.json()

    def delete(self, model, options: Optional[Dict] = None) -> Dict[str, Any]:
        url = self.url_for(model)

        if self.debug:
            print(f"  DELETE {url}")

        response = self._session.delete(url, headers=self.config.headers)
        response.raise_for_status()
        return response.json()

    def _body(self, model) -> Dict[str, Any]:
        """Request body for create/update: attributes, nested models as Pointers."""
        body = {}
        for key, value in model.to_json().items():
            if hasattr(value, "to_pointer"):
                value = value.to_pointer()
            body[key] = value
        return body
