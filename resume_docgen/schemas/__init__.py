"""Schemas — Pydantic models for API request boundaries."""
