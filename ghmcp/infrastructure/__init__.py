"""Infrastructure layer: adapters for persistence, security, logging and GitHub."""
