"""GraphQL adapter (strawberry) for the club services."""

from .schema import graphql_router, schema

__all__ = ["graphql_router", "schema"]
