"""create-graphqlgen -- scaffolds a GraphQL server from a graphqlgen starter."""

__version__ = "0.1.0"
