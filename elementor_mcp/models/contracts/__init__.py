"""Pydantic contracts for elements, widgets and documents."""
