"""Persona chat backend: historical personas, chat sessions and LLM replies."""

__version__ = "1.0.0"
