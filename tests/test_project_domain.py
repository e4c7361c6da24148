"""Lifecycle tests for the project domain controller."""

import logging

import pytest

from errors import CanceledError, InvalidIdentifierError, ResourceError
from resources.models import ProjectDomain
from resources.project_domain import ProjectDomainController


@pytest.fixture
def controller(api_client):
    return ProjectDomainController(api_client)


@pytest.mark.asyncio
class TestCreate:
    """Tests for ProjectDomainController.create."""

    async def test_create(self, controller, fake_api):
        plan = ProjectDomain(
            project_id="proj_1",
            domain="example.com",
            team_id="team_a",
            git_branch="main",
        )

        state = await controller.create(plan)

        assert state == ProjectDomain(
            project_id="proj_1",
            domain="example.com",
            team_id="team_a",
            git_branch="main",
            id="example.com",
        )
        request = fake_api.last_request()
        assert request.body == {"name": "example.com", "gitBranch": "main"}
        assert request.query == {"teamId": "team_a"}
        assert ("proj_1", "example.com") in fake_api.project_domains

    async def test_create_conflict(self, controller, fake_api):
        fake_api.fail_with = (
            409,
            {"error": {"code": "domain_taken", "message": "Domain in use"}},
        )
        plan = ProjectDomain(project_id="proj_1", domain="example.com")

        with pytest.raises(ResourceError) as exc_info:
            await controller.create(plan)

        assert exc_info.value.summary == "Error creating project domain"
        assert "domain example.com for project proj_1" in exc_info.value.detail
        assert exc_info.value.status_code == 409


@pytest.mark.asyncio
class TestRead:
    """Tests for ProjectDomainController.read."""

    async def test_read(self, controller, fake_api):
        fake_api.add_project_domain(
            "proj_1", "example.com", redirect="www.example.com", redirectStatusCode=308
        )
        state = ProjectDomain(project_id="proj_1", domain="example.com")

        result = await controller.read(state)

        assert result.redirect == "www.example.com"
        assert result.redirect_status_code == 308
        assert result.team_id is None

    async def test_read_detached_domain_is_absent(self, controller):
        state = ProjectDomain(project_id="proj_1", domain="gone.com")
        assert await controller.read(state) is None

    async def test_read_forbidden(self, controller, fake_api):
        fake_api.fail_with = (403, {"error": {"message": "Not authorized"}})
        state = ProjectDomain(project_id="proj_1", domain="example.com")

        with pytest.raises(ResourceError) as exc_info:
            await controller.read(state)

        assert exc_info.value.summary == "Error reading project domain"
        assert "Not authorized" in exc_info.value.detail


@pytest.mark.asyncio
class TestUpdate:
    """Tests for ProjectDomainController.update."""

    async def test_update_clears_unset_fields(self, controller, fake_api):
        fake_api.add_project_domain(
            "proj_1", "example.com", redirect="www.example.com", gitBranch="main"
        )
        prior = ProjectDomain(
            project_id="proj_1",
            domain="example.com",
            redirect="www.example.com",
            git_branch="main",
            id="example.com",
        )
        plan = ProjectDomain(
            project_id="proj_1", domain="example.com", git_branch="staging"
        )

        state = await controller.update(plan, prior)

        request = fake_api.last_request()
        assert request.method == "PATCH"
        assert request.path == "/v4/projects/proj_1/domains/example.com"
        assert request.body == {
            "redirect": None,
            "redirectStatusCode": None,
            "gitBranch": "staging",
        }
        assert state.redirect is None
        assert state.git_branch == "staging"

    async def test_update_addresses_prior_resource(
        self, controller, fake_api, caplog
    ):
        fake_api.add_project_domain("proj_1", "example.com")
        prior = ProjectDomain(project_id="proj_1", domain="example.com")
        plan = ProjectDomain(
            project_id="proj_2",
            domain="example.org",
            team_id="team_b",
            redirect="example.net",
        )

        with caplog.at_level(logging.WARNING):
            state = await controller.update(plan, prior)

        request = fake_api.last_request()
        assert request.path == "/v4/projects/proj_1/domains/example.com"
        assert request.query == {}
        assert state.project_id == "proj_1"
        assert state.domain == "example.com"
        assert state.redirect == "example.net"
        assert "project_id, domain, team_id" in caplog.text


@pytest.mark.asyncio
class TestDelete:
    """Tests for ProjectDomainController.delete."""

    async def test_delete(self, controller, fake_api):
        fake_api.add_project_domain("proj_1", "example.com")

        await controller.delete(
            ProjectDomain(project_id="proj_1", domain="example.com")
        )

        assert fake_api.project_domains == {}

    async def test_delete_already_detached(self, controller, fake_api):
        state = ProjectDomain(project_id="proj_1", domain="example.com")
        assert await controller.delete(state) is None

    async def test_delete_timeout(self, controller, fake_api):
        fake_api.delay = 0.5
        state = ProjectDomain(project_id="proj_1", domain="example.com")

        with pytest.raises(CanceledError):
            await controller.delete(state, timeout=0.05)


@pytest.mark.asyncio
class TestImport:
    """Tests for ProjectDomainController.import_state."""

    async def test_import_with_team(self, controller, fake_api):
        fake_api.add_project_domain("proj_1", "example.com")

        state = await controller.import_state("team_a/proj_1/example.com")

        assert state.team_id == "team_a"
        assert state.project_id == "proj_1"
        assert state.domain == "example.com"
        request = fake_api.last_request()
        assert request.path == "/v4/projects/proj_1/domains/example.com"
        assert request.query == {"teamId": "team_a"}

    async def test_import_without_team(self, controller, fake_api):
        fake_api.add_project_domain("proj_1", "example.com")

        state = await controller.import_state("proj_1/example.com")

        assert state.team_id is None
        assert fake_api.last_request().query == {}

    async def test_import_invalid_id(self, controller, fake_api):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            await controller.import_state("a/b/c/d")

        message = str(exc_info.value)
        assert '"team_id/project_id/domain" or "project_id/domain"' in message
        assert fake_api.requests == []

    async def test_import_missing_domain(self, controller, fake_api):
        with pytest.raises(ResourceError) as exc_info:
            await controller.import_state("proj_1/missing.com")

        assert exc_info.value.summary == "Error importing project domain"
        assert "proj_1/missing.com" in exc_info.value.detail
        assert exc_info.value.status_code == 404
