"""
Local state for managed resources and conversion from/to the wire models.

The same frozen dataclass describes a resource's desired configuration and
its persisted state. Optional attributes are None when unset; converters
never turn an absent or empty remote value into a made-up default.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from client.models import (
    CreateDNSRecordRequest,
    CreateProjectDomainRequest,
    DNSRecordResponse,
    ProjectDomainResponse,
    SRVRequest,
    UpdateDNSRecordRequest,
    UpdateProjectDomainRequest,
)
from identifiers import CompositeID

DNS_RECORD_TYPES = ("A", "AAAA", "ALIAS", "CAA", "CNAME", "MX", "SRV", "TXT")


def _optional(value: Optional[str]) -> Optional[str]:
    """Empty strings are treated as unset."""
    return value or None


@dataclass(frozen=True)
class SRV:
    """SRV record data."""

    port: int
    priority: int
    weight: int
    target: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SRV":
        return cls(
            port=int(data["port"]),
            priority=int(data["priority"]),
            weight=int(data["weight"]),
            target=_optional(data.get("target")),
        )


@dataclass(frozen=True)
class DNSRecord:
    """A DNS record on a domain."""

    domain: str
    type: str
    name: str = ""
    value: Optional[str] = None
    ttl: Optional[int] = None
    mx_priority: Optional[int] = None
    srv: Optional[SRV] = None
    team_id: Optional[str] = None
    id: Optional[str] = None

    REQUIRES_REPLACE = ("domain", "type", "team_id")
    MUTABLE = ("name", "value", "ttl", "mx_priority", "srv")

    @property
    def composite_id(self) -> CompositeID:
        return CompositeID(team_id=self.team_id, parent=self.domain, key=self.id or "")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DNSRecord":
        """Build a record from user-supplied configuration."""
        record_type = str(data["type"]).upper()
        if record_type not in DNS_RECORD_TYPES:
            raise ValueError(
                f"Unsupported DNS record type '{data['type']}'. "
                f"Supported types: {', '.join(DNS_RECORD_TYPES)}"
            )
        srv = data.get("srv")
        return cls(
            domain=data["domain"],
            type=record_type,
            name=data.get("name", ""),
            value=data.get("value"),
            ttl=data.get("ttl"),
            mx_priority=data.get("mx_priority"),
            srv=SRV.from_dict(srv) if srv else None,
            team_id=_optional(data.get("team_id")),
            id=data.get("id"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProjectDomain:
    """A domain attached to a project."""

    project_id: str
    domain: str
    team_id: Optional[str] = None
    redirect: Optional[str] = None
    redirect_status_code: Optional[int] = None
    git_branch: Optional[str] = None
    id: Optional[str] = None

    REQUIRES_REPLACE = ("project_id", "domain", "team_id")
    MUTABLE = ("redirect", "redirect_status_code", "git_branch")

    @property
    def composite_id(self) -> CompositeID:
        return CompositeID(
            team_id=self.team_id, parent=self.project_id, key=self.domain
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectDomain":
        """Build a project domain from user-supplied configuration."""
        return cls(
            project_id=data["project_id"],
            domain=data["domain"],
            team_id=_optional(data.get("team_id")),
            redirect=data.get("redirect"),
            redirect_status_code=data.get("redirect_status_code"),
            git_branch=data.get("git_branch"),
            id=data.get("id"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def requires_replace_changes(plan, prior) -> List[str]:
    """Attributes whose change cannot be applied in place."""
    return [
        attr
        for attr in plan.REQUIRES_REPLACE
        if getattr(plan, attr) != getattr(prior, attr)
    ]


# DNS records


def _parse_srv(value: str) -> Optional[SRV]:
    """SRV data comes back packed as "priority weight port [target]"."""
    parts = value.split(" ", 3)
    if len(parts) < 3:
        return None
    try:
        priority, weight, port = (int(p) for p in parts[:3])
    except ValueError:
        return None
    target = parts[3].strip() if len(parts) == 4 else None
    return SRV(port=port, priority=priority, weight=weight, target=target or None)


def _srv_request(srv: Optional[SRV]) -> Optional[SRVRequest]:
    if srv is None:
        return None
    return SRVRequest(
        port=srv.port, priority=srv.priority, weight=srv.weight, target=srv.target
    )


def convert_response_to_dns_record(
    out: DNSRecordResponse, team_id: Optional[str]
) -> DNSRecord:
    """Derive the persisted state of a DNS record from the API's answer."""
    value: Optional[str] = out.value
    srv = None
    if out.type == "SRV":
        srv = _parse_srv(out.value)
        value = None

    return DNSRecord(
        domain=out.domain,
        type=out.type,
        name=out.name,
        value=_optional(value),
        ttl=out.ttl,
        mx_priority=out.mx_priority if out.type == "MX" else None,
        srv=srv,
        team_id=_optional(team_id),
        id=out.id,
    )


def dns_record_create_request(plan: DNSRecord) -> CreateDNSRecordRequest:
    return CreateDNSRecordRequest(
        name=plan.name,
        type=plan.type,
        value=plan.value,
        ttl=plan.ttl,
        mx_priority=plan.mx_priority,
        srv=_srv_request(plan.srv),
    )


def dns_record_update_request(
    plan: DNSRecord, prior: DNSRecord
) -> UpdateDNSRecordRequest:
    """
    Only mutable attributes that differ from the prior state are sent. An
    attribute set before and unset in the plan is sent as null.
    """
    changed: Dict[str, Any] = {}
    cleared: List[str] = []
    for attr in DNSRecord.MUTABLE:
        value = getattr(plan, attr)
        if value == getattr(prior, attr):
            continue
        if value is None:
            cleared.append(attr)
        else:
            changed[attr] = value
    if "srv" in changed:
        changed["srv"] = _srv_request(changed["srv"])
    return UpdateDNSRecordRequest(cleared=tuple(cleared), **changed)


# Project domains


def convert_response_to_project_domain(
    out: ProjectDomainResponse, team_id: Optional[str]
) -> ProjectDomain:
    """Derive the persisted state of a project domain from the API's answer."""
    return ProjectDomain(
        project_id=out.project_id,
        domain=out.name,
        team_id=_optional(team_id),
        redirect=_optional(out.redirect),
        redirect_status_code=out.redirect_status_code or None,
        git_branch=_optional(out.git_branch),
        id=out.name,
    )


def project_domain_create_request(plan: ProjectDomain) -> CreateProjectDomainRequest:
    return CreateProjectDomainRequest(
        name=plan.domain,
        redirect=plan.redirect,
        redirect_status_code=plan.redirect_status_code,
        git_branch=plan.git_branch,
    )


def project_domain_update_request(plan: ProjectDomain) -> UpdateProjectDomainRequest:
    return UpdateProjectDomainRequest(
        redirect=plan.redirect,
        redirect_status_code=plan.redirect_status_code,
        git_branch=plan.git_branch,
    )
