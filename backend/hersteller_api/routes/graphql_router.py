"""
Hersteller Service — GraphQL Endpoint
=======================================

What:  /graphql with queries for reading and mutations for writing manufacturers.
How:   Strawberry schema mounted through strawberry.fastapi.GraphQLRouter. The
       context carries the request's AsyncSession and the service container,
       both obtained through FastAPI dependencies.
Who:   Called by GraphQL clients.

Schema:
    type Query {
      hersteller(id: ID!): Hersteller!
      herstellers(name: String): [Hersteller!]!
    }
    type Mutation {
      create(input: HerstellerInput!): ID!
      update(input: HerstellerUpdateInput!): Int!
      delete(id: ID!): Boolean!
    }

Business outcomes become GraphQL errors (extension code BAD_USER_INPUT)
carrying the outcome's message.
"""

import logging
from typing import List, Optional

import strawberry
from fastapi import Depends, Request
from graphql import GraphQLError
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from hersteller_api.database import get_db_session
from hersteller_api.dependencies import HerstellerServices, get_services
from hersteller_api.models.hersteller import Hersteller
from hersteller_api.schemas.hersteller import HerstellerCreate, HerstellerUpdate
from hersteller_api.services.version import encode_version

logger = logging.getLogger(__name__)


def _bad_user_input(message: str) -> GraphQLError:
    return GraphQLError(message, extensions={"code": "BAD_USER_INPUT"})


# ── Types ─────────────────────────────────────────────────────────────────


@strawberry.type(name="Hersteller")
class HerstellerType:
    id: strawberry.ID
    version: int
    name: str
    telephone: Optional[str]
    homepage: Optional[str]
    schlagwoerter: List[str]

    @classmethod
    def from_model(cls, hersteller: Hersteller) -> "HerstellerType":
        return cls(
            id=strawberry.ID(hersteller.id),
            version=hersteller.version,
            name=hersteller.name,
            telephone=hersteller.telephone,
            homepage=hersteller.homepage,
            schlagwoerter=[s.schlagwort for s in hersteller.schlagwoerter],
        )


@strawberry.input
class HerstellerInput:
    name: Optional[str] = None
    telephone: Optional[str] = None
    homepage: Optional[str] = None
    schlagwoerter: Optional[List[str]] = None


@strawberry.input
class HerstellerUpdateInput:
    id: Optional[strawberry.ID] = None
    version: Optional[int] = None
    name: Optional[str] = None
    telephone: Optional[str] = None
    homepage: Optional[str] = None


# ── Resolvers ─────────────────────────────────────────────────────────────


@strawberry.type
class Query:
    @strawberry.field
    async def hersteller(self, info: Info, id: strawberry.ID) -> HerstellerType:
        db: AsyncSession = info.context["db"]
        services: HerstellerServices = info.context["services"]
        hersteller = await services.reader.find_by_id(db, id)
        if hersteller is None:
            raise _bad_user_input(f"No manufacturer with the ID {id} was found.")
        return HerstellerType.from_model(hersteller)

    @strawberry.field
    async def herstellers(self, info: Info, name: Optional[str] = None) -> List[HerstellerType]:
        db: AsyncSession = info.context["db"]
        services: HerstellerServices = info.context["services"]
        criteria = {"name": name} if name else {}
        herstellers = await services.reader.find(db, criteria)
        if not herstellers:
            raise _bad_user_input("No manufacturers were found.")
        return [HerstellerType.from_model(h) for h in herstellers]


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create(self, info: Info, input: HerstellerInput) -> strawberry.ID:
        db: AsyncSession = info.context["db"]
        services: HerstellerServices = info.context["services"]
        payload = HerstellerCreate(
            name=input.name,
            telephone=input.telephone,
            homepage=input.homepage,
            schlagwoerter=input.schlagwoerter or [],
        )
        result = await services.writer.create(db, payload)
        if not isinstance(result, str):
            raise _bad_user_input(result.message)
        return strawberry.ID(result)

    @strawberry.mutation
    async def update(self, info: Info, input: HerstellerUpdateInput) -> int:
        db: AsyncSession = info.context["db"]
        services: HerstellerServices = info.context["services"]
        payload = HerstellerUpdate(
            name=input.name,
            telephone=input.telephone,
            homepage=input.homepage,
        )
        # The writer expects the wire token; a missing version stays None
        token = encode_version(input.version) if input.version is not None else None
        result = await services.writer.update(db, input.id, payload, token)
        if not isinstance(result, int):
            raise _bad_user_input(result.message)
        return result

    @strawberry.mutation
    async def delete(self, info: Info, id: strawberry.ID) -> bool:
        db: AsyncSession = info.context["db"]
        services: HerstellerServices = info.context["services"]
        return await services.writer.delete(db, id)


schema = strawberry.Schema(query=Query, mutation=Mutation)


async def get_context(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
):
    return {"db": db, "services": get_services(request)}


def create_graphql_router() -> GraphQLRouter:
    """A fresh router per application; mount it under /graphql."""
    return GraphQLRouter(schema, context_getter=get_context)
