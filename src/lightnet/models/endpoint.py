"""Declarative description of a single HTTP call."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Optional

from .components import HTTPHeaders, HTTPMethod, Parameters


@dataclass
class Endpoint:
    """
    Components needed to build one HTTP request against a base URL.

    Attributes:
        path: Path appended to the client's base URL (e.g. /api/patient/siteList)
        http_method: HTTP method of the request
        url_params: Parameters encoded into the query string, typically for GET
        body_params: Parameters sent in the body, typically for POST
        http_headers: Extra headers applied on top of the computed ones

    Example:
        endpoint = Endpoint("/api/items", http_method=HTTPMethod.POST)
        endpoint.add_body_param("name", "lamp")
        endpoint.add_http_header("Authorization", "Bearer abc")
        data = await network.request(endpoint)
    """

    path: str
    http_method: HTTPMethod = HTTPMethod.GET
    url_params: Parameters = field(default_factory=dict)
    body_params: Optional[Parameters] = None
    http_headers: HTTPHeaders = field(default_factory=dict)

    def add_url_param(self, name: str, value: Any) -> None:
        """Add or overwrite a URL query parameter."""
        self.url_params[name] = value

    def add_body_param(self, name: str, value: Any) -> None:
        """Add or overwrite a body parameter, creating the body on first use."""
        if self.body_params is None:
            self.body_params = {}
        self.body_params[name] = value

    def add_http_header(self, name: str, value: str) -> None:
        """Add or overwrite an extra HTTP header."""
        self.http_headers[name] = value

    def snapshot(self) -> Endpoint:
        """
        Return an independent copy for an in-flight request.

        Mutating this endpoint afterwards does not affect the copy.
        """
        return Endpoint(
            path=self.path,
            http_method=self.http_method,
            url_params=copy.deepcopy(self.url_params),
            body_params=copy.deepcopy(self.body_params),
            http_headers=dict(self.http_headers),
        )
