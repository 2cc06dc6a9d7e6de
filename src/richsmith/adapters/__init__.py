"""Output functions, resolvers and external capabilities."""
