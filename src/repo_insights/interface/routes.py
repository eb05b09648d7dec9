"""GraphQL query root — thin resolvers that delegate to the use cases."""

from __future__ import annotations

import strawberry
from graphql import GraphQLError
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext, Info

from repo_insights.interface.dependencies import get_context
from repo_insights.interface.error_handlers import ErrorCodeExtension, log_graphql_errors
from repo_insights.interface.schemas import Repository, RepositoryDetails
from repo_insights.services.fetch_repository_details import FetchRepositoryDetailsUseCase
from repo_insights.services.list_repositories import ListRepositoriesUseCase


@strawberry.type
class Query:
    @strawberry.field(description="Up to 100 repositories of the authenticated viewer.")
    async def list_repositories(self, info: Info) -> list[Repository]:
        use_case: ListRepositoriesUseCase = info.context["list_repositories"]
        repositories = await use_case.execute()
        return [Repository.from_entity(repo) for repo in repositories]

    @strawberry.field(
        description=(
            "Details for each named repository, in request order. Webhooks are "
            "listed under `owner`; `fileContent` is the first file whose "
            "extension equals `fileType`."
        )
    )
    async def fetch_repositories_details(
        self,
        info: Info,
        repo_names: list[str],
        owner: str,
        file_type: str | None = None,
    ) -> list[RepositoryDetails]:
        use_case: FetchRepositoryDetailsUseCase = info.context["fetch_details"]
        details = await use_case.execute(repo_names, file_type, owner)
        return [RepositoryDetails.from_entity(item) for item in details]


class InsightsSchema(strawberry.Schema):
    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        log_graphql_errors(errors)


schema = InsightsSchema(query=Query, extensions=[ErrorCodeExtension])

router = GraphQLRouter(schema, context_getter=get_context)
