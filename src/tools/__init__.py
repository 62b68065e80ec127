"""Developer and user tooling."""
