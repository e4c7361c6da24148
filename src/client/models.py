"""
Wire models for the remote API.

Requests serialize to the JSON bodies the API expects and leave out unset
optional fields. Responses tolerate absent optional keys.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

# Attribute name -> JSON key for the DNS record update body
DNS_UPDATE_FIELDS = {
    "name": "name",
    "value": "value",
    "ttl": "ttl",
    "mx_priority": "mxPriority",
    "srv": "srv",
}


@dataclass
class SRVRequest:
    """SRV record data as sent on create/update."""

    port: int
    priority: int
    weight: int
    target: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        body = {"port": self.port, "priority": self.priority, "weight": self.weight}
        if self.target is not None:
            body["target"] = self.target
        return body


@dataclass
class CreateDNSRecordRequest:
    """Body of POST /v4/domains/{domain}/records."""

    name: str
    type: str
    value: Optional[str] = None
    ttl: Optional[int] = None
    mx_priority: Optional[int] = None
    srv: Optional[SRVRequest] = None

    def to_json(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"name": self.name, "type": self.type}
        if self.value is not None:
            body["value"] = self.value
        if self.ttl is not None:
            body["ttl"] = self.ttl
        if self.mx_priority is not None:
            body["mxPriority"] = self.mx_priority
        if self.srv is not None:
            body["srv"] = self.srv.to_json()
        return body


@dataclass
class UpdateDNSRecordRequest:
    """
    Body of PATCH /v4/domains/records/{id}.

    Only set fields are sent. Attributes named in ``cleared`` are sent as
    null so the remote drops them.
    """

    name: Optional[str] = None
    value: Optional[str] = None
    ttl: Optional[int] = None
    mx_priority: Optional[int] = None
    srv: Optional[SRVRequest] = None
    cleared: Tuple[str, ...] = ()

    def to_json(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        for attr, key in DNS_UPDATE_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                body[key] = value.to_json() if attr == "srv" else value
            elif attr in self.cleared:
                body[key] = None
        return body

    def is_empty(self) -> bool:
        return not self.to_json()


@dataclass
class DNSRecordResponse:
    """A DNS record as returned by the API."""

    id: str
    domain: str
    name: str
    type: str
    value: str = ""
    ttl: Optional[int] = None
    mx_priority: Optional[int] = None
    created_at: Optional[int] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "DNSRecordResponse":
        return cls(
            id=data["id"],
            domain=data.get("domain", ""),
            name=data.get("name", ""),
            type=data.get("type") or data.get("recordType", ""),
            value=data.get("value") or "",
            ttl=data.get("ttl"),
            mx_priority=data.get("mxPriority"),
            created_at=data.get("createdAt"),
        )


@dataclass
class CreateProjectDomainRequest:
    """Body of POST /v4/projects/{id}/domains."""

    name: str
    redirect: Optional[str] = None
    redirect_status_code: Optional[int] = None
    git_branch: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"name": self.name}
        if self.redirect is not None:
            body["redirect"] = self.redirect
        if self.redirect_status_code is not None:
            body["redirectStatusCode"] = self.redirect_status_code
        if self.git_branch is not None:
            body["gitBranch"] = self.git_branch
        return body


@dataclass
class UpdateProjectDomainRequest:
    """
    Body of PATCH /v4/projects/{id}/domains/{domain}.

    All mutable fields are always sent; null clears a redirect or branch.
    """

    redirect: Optional[str] = None
    redirect_status_code: Optional[int] = None
    git_branch: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "redirect": self.redirect,
            "redirectStatusCode": self.redirect_status_code,
            "gitBranch": self.git_branch,
        }


@dataclass
class ProjectDomainResponse:
    """A domain attached to a project, as returned by the API."""

    name: str
    project_id: str
    redirect: Optional[str] = None
    redirect_status_code: Optional[int] = None
    git_branch: Optional[str] = None
    verified: Optional[bool] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ProjectDomainResponse":
        return cls(
            name=data["name"],
            project_id=data.get("projectId", ""),
            redirect=data.get("redirect"),
            redirect_status_code=data.get("redirectStatusCode"),
            git_branch=data.get("gitBranch"),
            verified=data.get("verified"),
        )
