"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EntryKind(str, Enum):
    """Git object type of a tree entry."""

    FILE = "blob"
    DIRECTORY = "tree"
    SUBMODULE = "commit"


class Visibility(str, Enum):
    """Repository visibility as reported by GitHub."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    INTERNAL = "INTERNAL"


@dataclass(frozen=True, slots=True)
class RepositorySummary:
    """One row of the viewer's repository listing."""

    name: str
    owner: str
    size: int | None = None  # diskUsage, in kilobytes


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A node of the shallow repository tree (file, directory or submodule).

    ``children`` is ``None`` unless upstream expanded this directory.
    """

    name: str
    kind: EntryKind
    path: str
    children: tuple[TreeEntry, ...] | None = None

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE


@dataclass(frozen=True, slots=True)
class RepositoryTree:
    """Repository metadata plus the root tree of the pinned branch."""

    id: str
    name: str
    owner: str
    visibility: Visibility
    size: int | None = None
    entries: tuple[TreeEntry, ...] | None = None


@dataclass(frozen=True, slots=True)
class WebhookConfig:
    content_type: str | None = None
    insecure_ssl: str | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class WebhookLastResponse:
    code: int | None = None
    status: str | None = None
    message: str | None = None


@dataclass(frozen=True, slots=True)
class Webhook:
    """A repository webhook as listed by ``GET /repos/{owner}/{repo}/hooks``."""

    id: int
    name: str
    active: bool
    events: tuple[str, ...] = ()
    type: str | None = None
    config: WebhookConfig = field(default_factory=WebhookConfig)
    created_at: str | None = None
    updated_at: str | None = None
    url: str | None = None
    test_url: str | None = None
    ping_url: str | None = None
    deliveries_url: str | None = None
    last_response: WebhookLastResponse = field(default_factory=WebhookLastResponse)


@dataclass(frozen=True, slots=True)
class RepositoryDetails:
    """The aggregated per-repository record returned to the caller."""

    name: str
    owner: str
    visibility: Visibility
    number_of_files: int
    size: int | None = None
    file_content: str | None = None
    active_webhooks: list[Webhook] = field(default_factory=list)
