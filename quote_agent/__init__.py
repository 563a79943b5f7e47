"""Quote Agent — Gemini relay for the handyman quote assistant."""

__version__ = "1.0.0"
