"""readme-cards - SVG cards summarizing GitHub activity."""

__version__ = "0.1.0"
