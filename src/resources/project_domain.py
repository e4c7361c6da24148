"""
Project domain resource.

Attaches a domain to a project, optionally redirecting it or pinning it to
a git branch. Composite id: ``[team_id/]project_id/domain``.
"""

from typing import Optional

from client import ProjectDomainResponse
from identifiers import CompositeID
from resources.base import ResourceController
from resources.models import (
    ProjectDomain,
    convert_response_to_project_domain,
    project_domain_create_request,
    project_domain_update_request,
)


class ProjectDomainController(ResourceController[ProjectDomain]):
    """Manages a domain attached to a project."""

    type_name = "vercel_project_domain"
    display_name = "project domain"
    id_components = ("project_id", "domain")
    state_class = ProjectDomain

    def describe(self, state: ProjectDomain) -> str:
        return f"domain {state.domain} for project {state.project_id}"

    def identity(self, state: ProjectDomain) -> CompositeID:
        return state.composite_id

    def convert(
        self, out: ProjectDomainResponse, team_id: Optional[str]
    ) -> ProjectDomain:
        return convert_response_to_project_domain(out, team_id)

    async def remote_create(
        self, plan: ProjectDomain, timeout: Optional[float]
    ) -> ProjectDomainResponse:
        out = await self.client.create_project_domain(
            plan.project_id,
            plan.team_id,
            project_domain_create_request(plan),
            timeout=timeout,
        )
        if not out.project_id:
            out.project_id = plan.project_id
        return out

    async def remote_get(
        self, ident: CompositeID, timeout: Optional[float]
    ) -> ProjectDomainResponse:
        out = await self.client.get_project_domain(
            ident.parent, ident.key, ident.team_id, timeout=timeout
        )
        if not out.project_id:
            out.project_id = ident.parent
        return out

    async def remote_update(
        self, plan: ProjectDomain, prior: ProjectDomain, timeout: Optional[float]
    ) -> ProjectDomainResponse:
        out = await self.client.update_project_domain(
            prior.project_id,
            prior.domain,
            prior.team_id,
            project_domain_update_request(plan),
            timeout=timeout,
        )
        if not out.project_id:
            out.project_id = prior.project_id
        return out

    async def remote_delete(
        self, state: ProjectDomain, timeout: Optional[float]
    ) -> None:
        await self.client.delete_project_domain(
            state.project_id, state.domain, state.team_id, timeout=timeout
        )
