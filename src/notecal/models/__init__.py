"""Pydantic models for documents, events and calendar configuration."""
