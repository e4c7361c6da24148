"""
Managed resource kinds.

Each kind is a ResourceController implementing the Create/Read/Update/
Delete/Import lifecycle against the remote API.
"""

from resources.base import ResourceController
from resources.dns_record import DNSRecordController
from resources.models import SRV, DNSRecord, ProjectDomain
from resources.project_domain import ProjectDomainController
from resources.registry import (
    ResourceRegistry,
    get_registry,
    register_builtin_resources,
)

__all__ = [
    "ResourceController",
    "DNSRecordController",
    "ProjectDomainController",
    "DNSRecord",
    "ProjectDomain",
    "SRV",
    "ResourceRegistry",
    "get_registry",
    "register_builtin_resources",
]
