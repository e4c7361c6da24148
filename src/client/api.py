"""
Remote API client.

Thin async wrapper over the remote REST API. Every call is bounded by a
timeout and every non-2xx answer is classified into an APIError, with 404
mapped to NotFoundError. No other module inspects status codes.
"""

import asyncio
import json
import logging
from typing import Any, Callable, Dict, List, Optional

import aiohttp

from client.models import (
    CreateDNSRecordRequest,
    CreateProjectDomainRequest,
    DNSRecordResponse,
    ProjectDomainResponse,
    UpdateDNSRecordRequest,
    UpdateProjectDomainRequest,
)
from config import DEFAULT_BASE_URL, ClientConfig
from errors import APIError, CanceledError, NotFoundError, RemoteError

logger = logging.getLogger(__name__)

API_VERSION = "v4"
# The list endpoint paginates; only a single page is ever requested.
MAX_PAGE_SIZE = 100


class Client:
    """
    Client for the DNS record and project domain endpoints.

    The token, base URL and default timeout are fixed at construction and
    shared read-only by every controller using the client.
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ):
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ClientConfig) -> "Client":
        return cls(
            api_token=config.api_token,
            base_url=config.base_url,
            timeout=config.request_timeout,
        )

    # DNS records

    async def list_dns_records(
        self,
        domain: str,
        team_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> List[DNSRecordResponse]:
        """List the DNS records of a domain (first page only, up to 100)."""
        return await self._request(
            "GET",
            f"domains/{domain}/records",
            team_id=team_id,
            params={"limit": MAX_PAGE_SIZE},
            timeout=timeout,
            parse=lambda data: [
                DNSRecordResponse.from_json(r) for r in data.get("records", [])
            ],
        )

    async def get_dns_record(
        self,
        record_id: str,
        team_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> DNSRecordResponse:
        return await self._request(
            "GET",
            f"domains/records/{record_id}",
            team_id=team_id,
            timeout=timeout,
            parse=DNSRecordResponse.from_json,
        )

    async def create_dns_record(
        self,
        domain: str,
        team_id: Optional[str],
        request: CreateDNSRecordRequest,
        timeout: Optional[float] = None,
    ) -> DNSRecordResponse:
        """
        Create a DNS record.

        The create endpoint only answers with the new record's uid, so the
        record is fetched straight afterwards to return its full shape.
        """
        uid = await self._request(
            "POST",
            f"domains/{domain}/records",
            team_id=team_id,
            body=request.to_json(),
            timeout=timeout,
            parse=lambda data: data["uid"],
        )
        return await self.get_dns_record(uid, team_id, timeout=timeout)

    async def update_dns_record(
        self,
        record_id: str,
        team_id: Optional[str],
        request: UpdateDNSRecordRequest,
        timeout: Optional[float] = None,
    ) -> DNSRecordResponse:
        return await self._request(
            "PATCH",
            f"domains/records/{record_id}",
            team_id=team_id,
            body=request.to_json(),
            timeout=timeout,
            parse=DNSRecordResponse.from_json,
        )

    async def delete_dns_record(
        self,
        domain: str,
        record_id: str,
        team_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        await self._request(
            "DELETE",
            f"domains/{domain}/records/{record_id}",
            team_id=team_id,
            timeout=timeout,
        )

    # Project domains

    async def get_project_domain(
        self,
        project_id: str,
        domain: str,
        team_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> ProjectDomainResponse:
        return await self._request(
            "GET",
            f"projects/{project_id}/domains/{domain}",
            team_id=team_id,
            timeout=timeout,
            parse=ProjectDomainResponse.from_json,
        )

    async def create_project_domain(
        self,
        project_id: str,
        team_id: Optional[str],
        request: CreateProjectDomainRequest,
        timeout: Optional[float] = None,
    ) -> ProjectDomainResponse:
        return await self._request(
            "POST",
            f"projects/{project_id}/domains",
            team_id=team_id,
            body=request.to_json(),
            timeout=timeout,
            parse=ProjectDomainResponse.from_json,
        )

    async def update_project_domain(
        self,
        project_id: str,
        domain: str,
        team_id: Optional[str],
        request: UpdateProjectDomainRequest,
        timeout: Optional[float] = None,
    ) -> ProjectDomainResponse:
        return await self._request(
            "PATCH",
            f"projects/{project_id}/domains/{domain}",
            team_id=team_id,
            body=request.to_json(),
            timeout=timeout,
            parse=ProjectDomainResponse.from_json,
        )

    async def delete_project_domain(
        self,
        project_id: str,
        domain: str,
        team_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        await self._request(
            "DELETE",
            f"projects/{project_id}/domains/{domain}",
            team_id=team_id,
            timeout=timeout,
        )

    # Private helper methods

    def _get_headers(self) -> Dict[str, str]:
        """Get HTTP headers for API requests."""
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.api_token}",
        }

    def _build_params(
        self, team_id: Optional[str], params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Merge endpoint params with the team scope, if one is set."""
        query = dict(params or {})
        if team_id:
            query["teamId"] = team_id
        return query

    async def _request(
        self,
        method: str,
        path: str,
        team_id: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
        parse: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """
        Perform a request and return the decoded JSON body, or the result of
        ``parse`` applied to it.

        Raises:
            NotFoundError: The API answered 404.
            APIError: The API answered with any other non-2xx status.
            CanceledError: The call did not complete within the timeout.
            RemoteError: The request failed at the transport level, or a 2xx
                body was not JSON of the expected shape.
        """
        url = f"{self.base_url}/{API_VERSION}/{path}"
        query = self._build_params(team_id, params)
        deadline = self.timeout if timeout is None else timeout

        logger.debug(f"{method} {url} params={query}")
        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=deadline)
            ) as session:
                async with session.request(
                    method,
                    url,
                    headers=self._get_headers(),
                    params=query or None,
                    json=body,
                ) as response:
                    text = await response.text()
                    if response.status >= 300:
                        raise self._classify_error(response.status, text)
                    try:
                        data = json.loads(text) if text else None
                        return parse(data) if parse else data
                    except (ValueError, KeyError, TypeError, AttributeError) as e:
                        raise RemoteError(
                            f"{method} {url} returned an invalid body: {e!r}",
                            status_code=response.status,
                        ) from e
        except asyncio.TimeoutError as e:
            raise CanceledError(
                f"{method} {url} did not complete within {deadline}s",
                timeout=deadline,
            ) from e
        except aiohttp.ClientError as e:
            raise RemoteError(f"{method} {url} failed: {e}") from e

    @staticmethod
    def _classify_error(status: int, text: str) -> APIError:
        """Turn a non-2xx response into an APIError, by status code only."""
        message, code = text, None
        try:
            data = json.loads(text)
        except ValueError:
            data = None

        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            message = data["error"].get("message", text)
            code = data["error"].get("code")

        logger.debug(f"API error {status}: {message}")
        if status == 404:
            return NotFoundError(status, message, code)
        return APIError(status, message, code)
