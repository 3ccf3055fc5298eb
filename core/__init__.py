"""Core LLM interaction layer for the Persona Fact Sheet Generator.

This package contains the provider interface, the Gemini backend and the
error taxonomy. It has ZERO dependency on any UI framework.
"""

__version__ = "0.1.0"
