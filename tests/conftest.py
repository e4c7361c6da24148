"""Pytest configuration and fixtures."""

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from client import Client


@dataclass
class RecordedRequest:
    """A request seen by the fake API."""

    method: str
    path: str
    query: Dict[str, str]
    body: Optional[Dict[str, Any]]
    headers: Dict[str, str]


class FakeAPI:
    """
    In-memory stand-in for the remote API.

    Stores DNS records and project domains, records every request, and can
    be told to fail or stall the next requests.
    """

    def __init__(self):
        self.records: Dict[str, Dict[str, Any]] = {}
        self.project_domains: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self.requests: List[RecordedRequest] = []
        self.fail_with: Optional[Tuple[int, Any]] = None
        self.delay: float = 0
        self._next_id = 1

    # Helpers for tests

    def add_record(self, **fields) -> Dict[str, Any]:
        record = {"id": f"rec_{self._next_id}", "ttl": 60, "value": "", **fields}
        self._next_id += 1
        self.records[record["id"]] = record
        return record

    def add_project_domain(
        self, project_id: str, name: str, **fields
    ) -> Dict[str, Any]:
        domain = {"name": name, "projectId": project_id, "verified": True, **fields}
        self.project_domains[(project_id, name)] = domain
        return domain

    def last_request(self) -> RecordedRequest:
        return self.requests[-1]

    # Application

    def make_app(self) -> web.Application:
        app = web.Application(middlewares=[self._middleware])
        app.router.add_get("/v4/domains/{domain}/records", self._list_records)
        app.router.add_post("/v4/domains/{domain}/records", self._create_record)
        app.router.add_get("/v4/domains/records/{record_id}", self._get_record)
        app.router.add_patch("/v4/domains/records/{record_id}", self._update_record)
        app.router.add_delete(
            "/v4/domains/{domain}/records/{record_id}", self._delete_record
        )
        app.router.add_post("/v4/projects/{project_id}/domains", self._create_domain)
        app.router.add_get("/v4/projects/{project_id}/domains/{name}", self._get_domain)
        app.router.add_patch(
            "/v4/projects/{project_id}/domains/{name}", self._update_domain
        )
        app.router.add_delete(
            "/v4/projects/{project_id}/domains/{name}", self._delete_domain
        )
        return app

    @web.middleware
    async def _middleware(self, request, handler):
        body = await request.json() if request.can_read_body else None
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.path,
                query=dict(request.query),
                body=body,
                headers=dict(request.headers),
            )
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            status, payload = self.fail_with
            if isinstance(payload, str):
                return web.Response(
                    text=payload, status=status, content_type="text/html"
                )
            return web.json_response(payload, status=status)
        return await handler(request)

    @staticmethod
    def _not_found(message: str) -> web.Response:
        return web.json_response(
            {"error": {"code": "not_found", "message": message}}, status=404
        )

    async def _list_records(self, request):
        domain = request.match_info["domain"]
        records = [r for r in self.records.values() if r["domain"] == domain]
        return web.json_response({"records": records[: int(request.query["limit"])]})

    async def _create_record(self, request):
        body = await request.json()
        value = body.get("value", "")
        if "srv" in body:
            srv = body["srv"]
            value = (
                f"{srv['priority']} {srv['weight']} {srv['port']} "
                f"{srv.get('target', '')}"
            )
        record = self.add_record(
            domain=request.match_info["domain"],
            name=body["name"],
            type=body["type"],
            value=value,
            ttl=body.get("ttl", 60),
        )
        if "mxPriority" in body:
            record["mxPriority"] = body["mxPriority"]
        return web.json_response({"uid": record["id"]})

    async def _get_record(self, request):
        record = self.records.get(request.match_info["record_id"])
        if record is None:
            return self._not_found("The DNS record was not found")
        return web.json_response(record)

    async def _update_record(self, request):
        record = self.records.get(request.match_info["record_id"])
        if record is None:
            return self._not_found("The DNS record was not found")
        body = await request.json()
        for key in ("name", "value", "ttl", "mxPriority"):
            if key in body:
                record[key] = body[key]
        return web.json_response(record)

    async def _delete_record(self, request):
        if self.records.pop(request.match_info["record_id"], None) is None:
            return self._not_found("The DNS record was not found")
        return web.json_response({})

    async def _create_domain(self, request):
        body = await request.json()
        fields = {
            key: body[key]
            for key in ("redirect", "redirectStatusCode", "gitBranch")
            if key in body
        }
        domain = self.add_project_domain(
            request.match_info["project_id"], body["name"], **fields
        )
        return web.json_response(domain)

    async def _get_domain(self, request):
        key = (request.match_info["project_id"], request.match_info["name"])
        if key not in self.project_domains:
            return self._not_found("The project domain was not found")
        return web.json_response(self.project_domains[key])

    async def _update_domain(self, request):
        key = (request.match_info["project_id"], request.match_info["name"])
        if key not in self.project_domains:
            return self._not_found("The project domain was not found")
        self.project_domains[key].update(await request.json())
        return web.json_response(self.project_domains[key])

    async def _delete_domain(self, request):
        key = (request.match_info["project_id"], request.match_info["name"])
        if self.project_domains.pop(key, None) is None:
            return self._not_found("The project domain was not found")
        return web.Response(status=204)


@pytest.fixture
def fake_api():
    """The in-memory API state."""
    return FakeAPI()


@pytest_asyncio.fixture
async def api_server(fake_api):
    """Serve the fake API on a local port."""
    server = TestServer(fake_api.make_app())
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def api_client(api_server):
    """A client pointed at the fake API."""
    return Client(
        api_token="test-token",
        base_url=str(api_server.make_url("")),
        timeout=5,
    )
