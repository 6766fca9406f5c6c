"""Judge0 REST API client for sandboxed remote code execution."""

from __future__ import annotations

import asyncio

import httpx

from codearena.config import LANGUAGE_IDS, Config
from codearena.executor_base import TransportError
from codearena.models import RawExecutionResponse

# Judge0 status codes
_STATUS_IN_QUEUE = 1
_STATUS_PROCESSING = 2


class Judge0Client:
    """Submits code to Judge0 and waits for the result."""

    def __init__(self, config: Config | None = None, client: httpx.AsyncClient | None = None) -> None:
        self._config = config or Config()
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"content-type": "application/json"}
        if self._config.uses_rapidapi:
            if not self._config.judge0_api_key:
                raise TransportError("JUDGE0_API_KEY is not configured for the RapidAPI endpoint")
            headers["X-RapidAPI-Key"] = self._config.judge0_api_key
            headers["X-RapidAPI-Host"] = self._config.rapidapi_host
        elif self._config.judge0_api_key:
            headers["X-Auth-Token"] = self._config.judge0_api_key
        return headers

    async def submit(
        self,
        language: str,
        source_code: str,
        stdin: str = "",
    ) -> RawExecutionResponse:
        language_id = LANGUAGE_IDS.get(language)
        if language_id is None:
            raise TransportError(f"No Judge0 language id for {language!r}")
        headers = self._headers()
        payload = {
            "language_id": language_id,
            "source_code": source_code,
            "stdin": stdin,
        }
        base = self._config.judge0_url.rstrip("/")

        if self._client is not None:
            return await self._submit(self._client, base, payload, headers)
        # Judge0 enforces its own time limits; wait as long as it takes
        async with httpx.AsyncClient(timeout=None) as client:
            return await self._submit(client, base, payload, headers)

    async def _submit(
        self,
        client: httpx.AsyncClient,
        base: str,
        payload: dict,
        headers: dict[str, str],
    ) -> RawExecutionResponse:
        try:
            resp = await client.post(
                f"{base}/submissions?base64_encoded=false&wait=true",
                json=payload,
                headers=headers,
            )
            resp.raise_for_status()
            data = resp.json()
            if not isinstance(data, dict):
                raise TransportError("Judge0 returned an invalid response")

            # Got a token but no finished status: the server didn't wait, so poll
            if _is_pending(data):
                token = data.get("token", "")
                if not token:
                    raise TransportError("Judge0 returned an unfinished submission without a token")
                data = await self._poll(client, token, headers, base)
            return RawExecutionResponse.from_json(data)
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Judge0 returned HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Judge0 request failed: {e}") from e
        except (ValueError, TypeError) as e:
            raise TransportError(f"Judge0 returned an invalid response: {e}") from e

    async def _poll(
        self,
        client: httpx.AsyncClient,
        token: str,
        headers: dict[str, str],
        base: str,
    ) -> dict:
        for _ in range(self._config.max_poll_attempts):
            await asyncio.sleep(self._config.poll_interval)
            resp = await client.get(
                f"{base}/submissions/{token}?base64_encoded=false",
                headers=headers,
            )
            resp.raise_for_status()
            data = resp.json()
            if not isinstance(data, dict):
                raise TransportError(f"Judge0 returned an invalid response for {token}")
            if not _is_pending(data):
                return data
        raise TransportError(f"Submission {token} did not finish after {self._config.max_poll_attempts} polls")


def _is_pending(data: dict) -> bool:
    status = data.get("status")
    if not isinstance(status, dict):
        return "token" in data and "stdout" not in data
    return status.get("id") in (_STATUS_IN_QUEUE, _STATUS_PROCESSING)
