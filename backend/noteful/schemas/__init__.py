"""Pydantic request/response models for the Noteful API (camelCase on the wire)."""
