"""
Resource Controller Base - Create/Read/Update/Delete/Import lifecycle.

A controller reconciles one kind of remote resource. The lifecycle is
implemented once here; each resource kind supplies the remote calls, the
state conversion and a description used in error messages.

The host calls at most one operation at a time for a given resource
instance. Every operation makes a single remote round trip, bounded by the
optional ``timeout`` (seconds, defaulting to the client's).
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, Tuple, Type, TypeVar

from client import Client
from errors import NotConfiguredError, NotFoundError, RemoteError, ResourceError
from identifiers import CompositeID, decode_id
from resources.models import requires_replace_changes

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")


class ResourceController(ABC, Generic[StateT]):
    """
    Abstract base class for resource controllers.

    Controllers are constructed with a ready-to-use client. Only
    NotFoundError is special-cased: Read turns it into None (the resource
    is gone) and Delete treats it as success. Every other remote failure
    is re-raised as a ResourceError naming the resource.
    """

    # Unique resource type name (e.g. 'vercel_dns_record')
    type_name: str = ""
    # Human-readable kind used in error summaries (e.g. 'DNS record')
    display_name: str = ""
    # Names of the parent and key components of the composite id
    id_components: Tuple[str, str] = ("parent_id", "key")
    # Dataclass used for both desired configuration and persisted state
    state_class: Type = object

    def __init__(self, client: Optional[Client]):
        if client is None:
            raise NotConfiguredError()
        self.client = client

    # Per-kind hooks

    @abstractmethod
    def describe(self, state: StateT) -> str:
        """Describe a resource instance for error details."""
        pass

    @abstractmethod
    def identity(self, state: StateT) -> CompositeID:
        """The composite identifier of a resource instance."""
        pass

    @abstractmethod
    def convert(self, out: Any, team_id: Optional[str]) -> StateT:
        """Derive local state from a remote object."""
        pass

    @abstractmethod
    async def remote_create(self, plan: StateT, timeout: Optional[float]) -> Any:
        pass

    @abstractmethod
    async def remote_get(self, ident: CompositeID, timeout: Optional[float]) -> Any:
        pass

    @abstractmethod
    async def remote_update(
        self, plan: StateT, prior: StateT, timeout: Optional[float]
    ) -> Any:
        pass

    @abstractmethod
    async def remote_delete(self, state: StateT, timeout: Optional[float]) -> None:
        pass

    # Lifecycle

    async def create(self, plan: StateT, timeout: Optional[float] = None) -> StateT:
        """
        Create the remote object described by a desired configuration.

        Args:
            plan: The desired configuration.
            timeout: Optional deadline for the remote call, in seconds.

        Returns:
            The state derived from the created remote object.

        Raises:
            ResourceError: The remote call failed.
            CanceledError: The remote call timed out.
        """
        try:
            out = await self.remote_create(plan, timeout)
        except RemoteError as e:
            raise ResourceError(
                f"Error creating {self.display_name}",
                f"Could not create {self.describe(plan)}, unexpected error: {e}",
            ) from e

        result = self.convert(out, plan.team_id)
        logger.debug(f"created {self.display_name}: {self._log_fields(result)}")
        return result

    async def read(
        self, state: StateT, timeout: Optional[float] = None
    ) -> Optional[StateT]:
        """
        Refresh a persisted state from the remote object.

        Returns:
            The fresh state, or None if the remote object no longer exists.

        Raises:
            ResourceError: The remote call failed for any reason but 404.
            CanceledError: The remote call timed out.
        """
        try:
            out = await self.remote_get(self.identity(state), timeout)
        except NotFoundError:
            logger.info(
                f"{self.display_name} {self.identity(state)} not found, "
                f"removing from state"
            )
            return None
        except RemoteError as e:
            raise ResourceError(
                f"Error reading {self.display_name}",
                f"Could not get {self.describe(state)}, unexpected error: {e}",
            ) from e

        result = self.convert(out, state.team_id)
        logger.debug(f"read {self.display_name}: {self._log_fields(result)}")
        return result

    async def update(
        self, plan: StateT, prior: StateT, timeout: Optional[float] = None
    ) -> StateT:
        """
        Apply the mutable attributes of a plan to an existing remote object.

        The request is addressed with the prior state's identifiers. Changed
        requires-replace attributes are never sent; the host is expected to
        replace the resource instead.

        Raises:
            ResourceError: The remote call failed.
            CanceledError: The remote call timed out.
        """
        replaced = requires_replace_changes(plan, prior)
        if replaced:
            logger.warning(
                f"Ignoring changes to {', '.join(replaced)} for "
                f"{self.describe(prior)}; these attributes require replacement"
            )

        try:
            out = await self.remote_update(plan, prior, timeout)
        except RemoteError as e:
            raise ResourceError(
                f"Error updating {self.display_name}",
                f"Could not update {self.describe(prior)}, unexpected error: {e}",
            ) from e

        result = self.convert(out, prior.team_id)
        logger.debug(f"updated {self.display_name}: {self._log_fields(result)}")
        return result

    async def delete(self, state: StateT, timeout: Optional[float] = None) -> None:
        """
        Delete the remote object. An object that is already gone is success.

        Raises:
            ResourceError: The remote call failed for any reason but 404.
            CanceledError: The remote call timed out.
        """
        try:
            await self.remote_delete(state, timeout)
        except NotFoundError:
            logger.info(f"{self.display_name} {self.identity(state)} already deleted")
            return
        except RemoteError as e:
            raise ResourceError(
                f"Error deleting {self.display_name}",
                f"Could not delete {self.describe(state)}, unexpected error: {e}",
            ) from e

        logger.debug(f"deleted {self.display_name}: {self._log_fields(state)}")

    async def import_state(
        self, external_id: str, timeout: Optional[float] = None
    ) -> StateT:
        """
        Build the state of an existing remote object from its composite id.

        Raises:
            InvalidIdentifierError: The id has neither 2 nor 3 components.
            ResourceError: The remote call failed (including 404).
            CanceledError: The remote call timed out.
        """
        parent, key = self.id_components
        ident = decode_id(external_id, parent=parent, key=key)

        try:
            out = await self.remote_get(ident, timeout)
        except RemoteError as e:
            raise ResourceError(
                f"Error importing {self.display_name}",
                f"Could not get {self.display_name} {external_id}, "
                f"unexpected error: {e}",
            ) from e

        result = self.convert(out, ident.team_id)
        logger.debug(f"imported {self.display_name}: {self._log_fields(result)}")
        return result

    def requires_replace(self, plan: StateT, prior: StateT) -> List[str]:
        """Attributes of the plan that force a delete and re-create."""
        return requires_replace_changes(plan, prior)

    def _log_fields(self, state: StateT) -> str:
        ident = self.identity(state)
        parent, key = self.id_components
        return (
            f"{parent}={ident.parent}, {key}={ident.key}, "
            f"team_id={ident.team_id}"
        )
