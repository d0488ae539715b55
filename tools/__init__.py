"""Clients for external services: the LLM provider and document text extraction."""
