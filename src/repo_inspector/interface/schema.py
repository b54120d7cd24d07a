"""GraphQL schema — thin resolvers that delegate to the use cases."""

from __future__ import annotations

from typing import Optional

import strawberry

from repo_inspector.domain.entities import RepositoryDetail, RepositorySummary
from repo_inspector.domain.exceptions import RepoInspectorError
from repo_inspector.domain.value_objects import Credential, RepoRef
from repo_inspector.interface.error_handlers import to_graphql_error
from repo_inspector.services.repository_details import RepositoryDetailsService
from repo_inspector.services.repository_list import RepositoryListService


@strawberry.type
class Repository:
    name: str
    size: int
    owner: str
    forked_from: Optional[str] = None

    @classmethod
    def from_summary(cls, summary: RepositorySummary) -> Repository:
        return cls(
            name=summary.name,
            size=summary.size,
            owner=summary.owner,
            forked_from=summary.forked_from,
        )


@strawberry.type
class RepositoryDetails:
    name: str
    size: int
    owner: str
    is_private: bool
    number_of_files: int
    yml_content: str
    active_webhooks: list[str]
    forked_from: Optional[str] = None

    @classmethod
    def from_detail(cls, detail: RepositoryDetail) -> RepositoryDetails:
        return cls(
            name=detail.name,
            size=detail.size,
            owner=detail.owner,
            is_private=detail.is_private,
            number_of_files=detail.number_of_files,
            yml_content=detail.yml_content,
            active_webhooks=list(detail.active_webhooks),
            forked_from=detail.forked_from,
        )


@strawberry.type
class Query:
    @strawberry.field(description="Repositories owned by the authenticated user.")
    async def list_repositories(
        self, info: strawberry.Info, token: str
    ) -> list[Repository]:
        host = info.context["host_factory"](Credential(token))
        try:
            summaries = await RepositoryListService(host).list_repositories()
        except RepoInspectorError as exc:
            raise to_graphql_error(exc) from exc
        return [Repository.from_summary(s) for s in summaries]

    @strawberry.field(description="Aggregated details of one repository.")
    async def get_repository_details(
        self, info: strawberry.Info, token: str, owner: str, repo_name: str
    ) -> RepositoryDetails:
        host = info.context["host_factory"](Credential(token))
        service = RepositoryDetailsService(host)
        try:
            detail = await service.get_details(RepoRef(owner=owner, name=repo_name))
        except RepoInspectorError as exc:
            raise to_graphql_error(exc) from exc
        return RepositoryDetails.from_detail(detail)


schema = strawberry.Schema(query=Query)
