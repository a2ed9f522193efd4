"""GitHub webhook event names and payload models."""
