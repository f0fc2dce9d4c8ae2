"""Resume upload analysis service: PDF text -> Gemini -> normalized record -> database."""

__version__ = "1.0.0"
