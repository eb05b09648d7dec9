"""Strawberry output types for the GraphQL boundary."""

from __future__ import annotations

import strawberry

from repo_insights.domain import entities

Visibility = strawberry.enum(entities.Visibility, description="Repository visibility.")


@strawberry.type(description="One repository of the viewer.")
class Repository:
    name: str
    size: int | None
    owner: str

    @classmethod
    def from_entity(cls, repo: entities.RepositorySummary) -> Repository:
        return cls(name=repo.name, size=repo.size, owner=repo.owner)


@strawberry.type
class WebhookConfig:
    content_type: str | None = strawberry.field(name="content_type")
    insecure_ssl: str | None = strawberry.field(name="insecure_ssl")
    url: str | None


@strawberry.type
class WebhookResponse:
    code: int | None
    status: str | None
    message: str | None


@strawberry.type(description="A repository webhook, with GitHub's field names.")
class Webhook:
    type: str | None
    id: int
    name: str
    active: bool
    events: list[str]
    config: WebhookConfig
    updated_at: str | None = strawberry.field(name="updated_at")
    created_at: str | None = strawberry.field(name="created_at")
    url: str | None
    test_url: str | None = strawberry.field(name="test_url")
    ping_url: str | None = strawberry.field(name="ping_url")
    deliveries_url: str | None = strawberry.field(name="deliveries_url")
    last_response: WebhookResponse = strawberry.field(name="last_response")

    @classmethod
    def from_entity(cls, hook: entities.Webhook) -> Webhook:
        return cls(
            type=hook.type,
            id=hook.id,
            name=hook.name,
            active=hook.active,
            events=list(hook.events),
            config=WebhookConfig(
                content_type=hook.config.content_type,
                insecure_ssl=hook.config.insecure_ssl,
                url=hook.config.url,
            ),
            updated_at=hook.updated_at,
            created_at=hook.created_at,
            url=hook.url,
            test_url=hook.test_url,
            ping_url=hook.ping_url,
            deliveries_url=hook.deliveries_url,
            last_response=WebhookResponse(
                code=hook.last_response.code,
                status=hook.last_response.status,
                message=hook.last_response.message,
            ),
        )


@strawberry.type(description="Aggregated details of one repository.")
class RepositoryDetails:
    name: str
    size: int | None
    owner: str
    visibility: Visibility
    number_of_files: int = strawberry.field(
        description=(
            "Files visible in the root tree and two levels below it. 0 when the "
            "pinned branch does not exist in this repository."
        )
    )
    file_content: str | None
    active_webhooks: list[Webhook]

    @classmethod
    def from_entity(cls, details: entities.RepositoryDetails) -> RepositoryDetails:
        return cls(
            name=details.name,
            size=details.size,
            owner=details.owner,
            visibility=details.visibility,
            number_of_files=details.number_of_files,
            file_content=details.file_content,
            active_webhooks=[Webhook.from_entity(h) for h in details.active_webhooks],
        )
