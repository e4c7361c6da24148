"""
DNS record resource.

Composite id: ``[team_id/]domain/record_id``.
"""

import logging
from typing import Optional

from client import DNSRecordResponse
from identifiers import CompositeID
from resources.base import ResourceController
from resources.models import (
    DNSRecord,
    convert_response_to_dns_record,
    dns_record_create_request,
    dns_record_update_request,
)

logger = logging.getLogger(__name__)


class DNSRecordController(ResourceController[DNSRecord]):
    """Manages a single DNS record on a domain."""

    type_name = "vercel_dns_record"
    display_name = "DNS record"
    id_components = ("domain", "record_id")
    state_class = DNSRecord

    def describe(self, state: DNSRecord) -> str:
        label = state.id or f"{state.name or '@'} ({state.type})"
        return f"DNS record {label} for domain {state.domain}"

    def identity(self, state: DNSRecord) -> CompositeID:
        return state.composite_id

    def convert(self, out: DNSRecordResponse, team_id: Optional[str]) -> DNSRecord:
        return convert_response_to_dns_record(out, team_id)

    async def remote_create(
        self, plan: DNSRecord, timeout: Optional[float]
    ) -> DNSRecordResponse:
        out = await self.client.create_dns_record(
            plan.domain, plan.team_id, dns_record_create_request(plan), timeout=timeout
        )
        if not out.domain:
            out.domain = plan.domain
        return out

    async def remote_get(
        self, ident: CompositeID, timeout: Optional[float]
    ) -> DNSRecordResponse:
        out = await self.client.get_dns_record(
            ident.key, ident.team_id, timeout=timeout
        )
        if not out.domain:
            out.domain = ident.parent
        return out

    async def remote_update(
        self, plan: DNSRecord, prior: DNSRecord, timeout: Optional[float]
    ) -> DNSRecordResponse:
        request = dns_record_update_request(plan, prior)
        if request.is_empty():
            logger.debug(f"No changes for {self.describe(prior)}, refreshing instead")
            return await self.remote_get(prior.composite_id, timeout)

        out = await self.client.update_dns_record(
            prior.id, prior.team_id, request, timeout=timeout
        )
        if not out.domain:
            out.domain = prior.domain
        return out

    async def remote_delete(self, state: DNSRecord, timeout: Optional[float]) -> None:
        await self.client.delete_dns_record(
            state.domain, state.id, state.team_id, timeout=timeout
        )
