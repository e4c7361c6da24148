"""
Remote API client package.

Typed request/response models and the async client for the DNS record and
project domain endpoints.
"""

from client.api import Client
from client.models import (
    CreateDNSRecordRequest,
    CreateProjectDomainRequest,
    DNSRecordResponse,
    ProjectDomainResponse,
    SRVRequest,
    UpdateDNSRecordRequest,
    UpdateProjectDomainRequest,
)

__all__ = [
    "Client",
    "CreateDNSRecordRequest",
    "CreateProjectDomainRequest",
    "DNSRecordResponse",
    "ProjectDomainResponse",
    "SRVRequest",
    "UpdateDNSRecordRequest",
    "UpdateProjectDomainRequest",
]
