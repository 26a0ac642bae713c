"""OllamaClient — synchronous httpx client for the local Ollama HTTP API.

Endpoints used:
- ``GET  /api/version``  — liveness check
- ``GET  /api/tags``     — locally available models
- ``POST /api/pull``     — download a model (non-streaming)
- ``POST /api/generate`` — single-shot completion (non-streaming)

Transport failures, non-2xx statuses, and undecodable bodies all surface
as :class:`OllamaError`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from autocommit.config.models import OllamaConfig

logger = logging.getLogger(__name__)


class OllamaError(Exception):
    """The Ollama server could not be reached or returned an unusable reply."""


class OllamaClient:
    """HTTP client for one Ollama server.

    The underlying :class:`httpx.Client` is created on first use and must be
    released with :meth:`close` (or by using the client as a context manager).
    """

    def __init__(
        self,
        config: OllamaConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or OllamaConfig()
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> OllamaClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def version(self) -> str:
        data = self._request("GET", "/api/version")
        return str(data.get("version", ""))

    def list_models(self) -> list[str]:
        """Names of locally available models (e.g. ``llama3.2:latest``)."""
        data = self._request("GET", "/api/tags")
        models = data.get("models") or []
        return [str(m["name"]) for m in models if isinstance(m, dict) and m.get("name")]

    def pull(self, model: str) -> str:
        """Download *model*. Blocks until the server reports completion."""
        data = self._request("POST", "/api/pull", json={"model": model, "stream": False})
        status = str(data.get("status", ""))
        if status and status != "success":
            raise OllamaError(f"Pull of '{model}' ended with status: {status}")
        return status

    def generate(self, model: str, prompt: str) -> str | None:
        """Run a non-streaming completion and return the ``response`` field.

        Returns None when the server omits the field or sends ``null``.
        """
        payload = {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "options": self._config.options.model_dump(),
        }
        data = self._request("POST", "/api/generate", json=payload)
        response = data.get("response")
        if response is None:
            return None
        return str(response)

    # ------------------------------------------------------------------
    # Transport helper
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        logger.debug("ollama %s %s", method, path)
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            body = exc.response.text.strip()
            raise OllamaError(
                f"{method} {path} returned HTTP {exc.response.status_code}"
                + (f": {body}" if body else "")
            ) from exc
        except httpx.HTTPError as exc:
            raise OllamaError(f"{method} {path} failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise OllamaError(f"{method} {path} returned a non-JSON body") from exc
        if not isinstance(data, dict):
            raise OllamaError(f"{method} {path} returned unexpected JSON: {data!r}")
        return data
