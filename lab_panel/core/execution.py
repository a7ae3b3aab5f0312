"""Client for the remote Octave execution service.

The service receives the four numeric parameters (not the generated script
text) and answers with ``{"images": ["/path.png", ...]}``.

Only the most recent request may update the client: each ``run`` takes a
sequence number and a response whose number is no longer the latest is
dropped. A cancelled ``LivenessToken`` blocks every update, so a response that
arrives after the panel was closed is ignored.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Sequence

import requests

from lab_panel.config import ServiceConfig
from lab_panel.core.contracts import ExecutionRequest, ExecutionResult, RunStatus

logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    """Base class for remote execution failures."""


class ServiceUnavailableError(ExecutionError):
    pass


class ServiceStatusError(ExecutionError):
    def __init__(self, status_code: int, detail: str = "") -> None:
        super().__init__(f"service returned HTTP {status_code}" + (f": {detail}" if detail else ""))
        self.status_code = status_code


class MalformedResponseError(ExecutionError):
    pass


class LivenessToken:
    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def _as_sample_count(x: float) -> int | float:
    if isinstance(x, float) and x.is_integer():
        return int(x)
    return x


def build_request(values: Mapping[str, float]) -> ExecutionRequest:
    return ExecutionRequest(
        N=_as_sample_count(values["num-samples"]),
        signal_power=values["signal-power"],
        noise_power=values["noise-power"],
        mu=values["step-size"],
    )


def resolve_artifact_url(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def parse_response(body: Any) -> list[str]:
    """Return the ``images`` list from a service response body."""
    if not isinstance(body, dict):
        raise MalformedResponseError(f"expected a JSON object, got {type(body).__name__}")
    images = body.get("images")
    if not isinstance(images, list) or not images:
        raise MalformedResponseError("response has no non-empty 'images' list")
    if not all(isinstance(p, str) for p in images):
        raise MalformedResponseError("'images' must contain only strings")
    return images


class ExecutionClient:
    def __init__(
        self,
        config: ServiceConfig,
        placeholder_artifacts: Sequence[str],
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self._session = session or requests.Session()
        self.artifact_urls: list[str] = list(placeholder_artifacts)
        self.show_results = False
        self.status = RunStatus.IDLE
        self.last_error: str | None = None
        self._issued = 0
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def result(self) -> ExecutionResult:
        return ExecutionResult(artifact_urls=tuple(self.artifact_urls))

    def _post_json(self, payload: dict[str, Any]) -> Any:
        url = self.config.run_url
        try:
            response = self._session.post(url, json=payload, timeout=self.config.timeout_s)
        except requests.exceptions.RequestException as exc:
            raise ServiceUnavailableError(f"could not reach {url}: {exc}") from exc

        if not response.ok:
            raise ServiceStatusError(response.status_code, response.text[:200])
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(f"response is not valid JSON: {exc}") from exc

    async def _submit(self, payload: dict[str, Any]) -> list[str]:
        body = await asyncio.to_thread(self._post_json, payload)
        images = parse_response(body)
        return [resolve_artifact_url(self.config.base_url, p) for p in images]

    async def run(self, values: Mapping[str, float], token: LivenessToken) -> None:
        """Submit ``values`` and apply the outcome to this client.

        Never raises on a failed request; failures are logged and leave the
        previous artifact list in place.
        """
        if token.cancelled:
            return

        # Captured now; later edits do not change this request.
        payload = build_request(values).to_dict()

        self._issued += 1
        seq = self._issued
        self._in_flight += 1
        self.status = RunStatus.LOADING
        self.show_results = False
        logger.info("Submitting run #%d to %s: %s", seq, self.config.run_url, payload)

        try:
            urls = await self._submit(payload)
        except Exception as exc:  # noqa: BLE001
            if token.cancelled:
                return
            if seq != self._issued:
                logger.info("Dropping failure of superseded run #%d: %s", seq, exc)
                return
            logger.error("Run #%d failed: %s", seq, exc)
            self.status = RunStatus.ERROR
            self.last_error = str(exc)
            self.show_results = False
        else:
            if token.cancelled:
                logger.info("Panel closed, discarding result of run #%d", seq)
                return
            if seq != self._issued:
                logger.info("Discarding result of superseded run #%d", seq)
                return
            self.artifact_urls = urls
            self.show_results = True
            self.status = RunStatus.SUCCESS
            self.last_error = None
            logger.info("Run #%d returned %d artifact(s)", seq, len(urls))
        finally:
            if not token.cancelled:
                self._in_flight -= 1
