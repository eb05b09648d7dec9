"""Pydantic models for the GitHub payloads this service consumes.

Responses are validated here before anything reaches the domain; a payload
that does not fit raises :class:`pydantic.ValidationError`, which the adapter
translates into :class:`~repo_insights.domain.exceptions.MalformedDataError`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repo_insights.domain.entities import (
    EntryKind,
    RepositorySummary,
    RepositoryTree,
    TreeEntry,
    Visibility,
    Webhook,
    WebhookConfig,
    WebhookLastResponse,
)


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class OwnerPayload(_Payload):
    login: str


# ── viewer.repositories ─────────────────────────────────────────────────────


class RepositoryNodePayload(_Payload):
    name: str
    owner: OwnerPayload
    disk_usage: int | None = Field(default=None, alias="diskUsage")

    def to_entity(self) -> RepositorySummary:
        return RepositorySummary(name=self.name, owner=self.owner.login, size=self.disk_usage)


class RepositoryConnectionPayload(_Payload):
    nodes: list[RepositoryNodePayload | None] = Field(default_factory=list)


class RepositoriesViewerPayload(_Payload):
    repositories: RepositoryConnectionPayload


class RepositoriesDataPayload(_Payload):
    viewer: RepositoriesViewerPayload


# ── viewer.repository.object (tree) ─────────────────────────────────────────


class TreeEntryPayload(_Payload):
    name: str
    type: EntryKind
    path: str
    object: TreeObjectPayload | None = None

    def to_entity(self) -> TreeEntry:
        children = None
        if self.object is not None and self.object.entries is not None:
            children = tuple(child.to_entity() for child in self.object.entries)
        return TreeEntry(name=self.name, kind=self.type, path=self.path, children=children)


class TreeObjectPayload(_Payload):
    """A git object; ``entries`` is only present when the object is a tree."""

    entries: list[TreeEntryPayload] | None = None


class RepositoryTreePayload(_Payload):
    id: str
    name: str
    owner: OwnerPayload
    visibility: Visibility
    disk_usage: int | None = Field(default=None, alias="diskUsage")
    object: TreeObjectPayload | None = None

    def to_entity(self) -> RepositoryTree:
        entries = None
        if self.object is not None and self.object.entries is not None:
            entries = tuple(entry.to_entity() for entry in self.object.entries)
        return RepositoryTree(
            id=self.id,
            name=self.name,
            owner=self.owner.login,
            visibility=self.visibility,
            size=self.disk_usage,
            entries=entries,
        )


class TreeViewerPayload(_Payload):
    repository: RepositoryTreePayload | None = None


class TreeDataPayload(_Payload):
    viewer: TreeViewerPayload


# ── viewer.repository.object (blob) ─────────────────────────────────────────


class BlobPayload(_Payload):
    text: str | None = None


class BlobRepositoryPayload(_Payload):
    object: BlobPayload | None = None


class BlobViewerPayload(_Payload):
    repository: BlobRepositoryPayload | None = None


class BlobDataPayload(_Payload):
    viewer: BlobViewerPayload


# ── REST: GET /repos/{owner}/{repo}/hooks ───────────────────────────────────


class WebhookConfigPayload(_Payload):
    content_type: str | None = None
    insecure_ssl: str | None = None
    url: str | None = None

    @field_validator("insecure_ssl", mode="before")
    @classmethod
    def _stringify_flag(cls, v: Any) -> Any:
        # GitHub documents a string but some installations send 0/1
        if isinstance(v, int):
            return str(int(v))
        return v


class WebhookLastResponsePayload(_Payload):
    code: int | None = None
    status: str | None = None
    message: str | None = None


class WebhookPayload(_Payload):
    id: int
    name: str
    active: bool
    events: list[str]
    type: str | None = None
    config: WebhookConfigPayload = Field(default_factory=WebhookConfigPayload)
    created_at: str | None = None
    updated_at: str | None = None
    url: str | None = None
    test_url: str | None = None
    ping_url: str | None = None
    deliveries_url: str | None = None
    last_response: WebhookLastResponsePayload = Field(
        default_factory=WebhookLastResponsePayload
    )

    def to_entity(self) -> Webhook:
        return Webhook(
            id=self.id,
            name=self.name,
            active=self.active,
            events=tuple(self.events),
            type=self.type,
            config=WebhookConfig(
                content_type=self.config.content_type,
                insecure_ssl=self.config.insecure_ssl,
                url=self.config.url,
            ),
            created_at=self.created_at,
            updated_at=self.updated_at,
            url=self.url,
            test_url=self.test_url,
            ping_url=self.ping_url,
            deliveries_url=self.deliveries_url,
            last_response=WebhookLastResponse(
                code=self.last_response.code,
                status=self.last_response.status,
                message=self.last_response.message,
            ),
        )


TreeEntryPayload.model_rebuild()
