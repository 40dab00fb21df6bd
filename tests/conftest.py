"""Shared fixtures: schemas built from SDL and introspected with graphql-core."""

import pytest
from graphql import build_schema, introspection_from_schema

from gql_opgen.core.config import GeneratorConfig
from gql_opgen.core.parser import IntrospectionParser

SAMPLE_SDL = '''
type Query {
  "Fetch a user by id"
  user(id: ID!): User
  users(limit: Int, offset: Int): [User!]!
  node(id: ID!): Node
  version: String
  legacyUsers: [User] @deprecated(reason: "Use users")
}

type Mutation {
  createUser(input: CreateUserInput!): User
}

type Subscription {
  userCreated: User
}

input CreateUserInput {
  name: String!
  email: String
}

enum Role {
  ADMIN
  MEMBER
}

type User {
  id: ID!
  name: String
  role: Role
  posts: [Post!]!
}

type Post {
  id: ID!
  title: String
  author: User
}

type Node {
  id: ID!
  name: String
  parent: Node
  children: [Node!]
}
'''


def introspect(sdl: str) -> dict:
    """Build an SDL schema and return its introspection result."""
    return dict(introspection_from_schema(build_schema(sdl)))


@pytest.fixture
def sample_payload():
    """Introspection result for SAMPLE_SDL."""
    return introspect(SAMPLE_SDL)


@pytest.fixture
def sample_schema(sample_payload):
    """Parsed IR for SAMPLE_SDL."""
    return IntrospectionParser(sample_payload).parse()


@pytest.fixture
def make_schema():
    """Factory: SDL string -> IRSchema."""
    def _make(sdl: str):
        return IntrospectionParser(introspect(sdl)).parse()
    return _make


@pytest.fixture
def config():
    """Default generation config."""
    return GeneratorConfig()


@pytest.fixture
def sample_sdl():
    return SAMPLE_SDL


@pytest.fixture
def introspect_sdl():
    """Factory: SDL string -> introspection result."""
    return introspect
