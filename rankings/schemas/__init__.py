"""Pydantic schemas: the domain model and its JSON wire form."""
