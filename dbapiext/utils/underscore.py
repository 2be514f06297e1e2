"""Convert CamelCase identifiers to snake_case."""

import re


def underscore(name: str) -> str:
    """Return ``name`` in snake_case (``BlogPost`` -> ``blog_post``, ``blog_post`` unchanged)."""
    return re.sub(r"(?<!^)(?<!_)(?=[A-Z])", "_", name).lower()
