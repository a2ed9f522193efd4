"""Webhook registration, filtering, dispatch and transport adapters."""
