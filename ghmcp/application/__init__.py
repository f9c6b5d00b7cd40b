"""Application layer: use-case services orchestrating domain ports."""
