"""{{description}}"""

__version__ = "{{version}}"


def describe() -> str:
    """Return a one-line description of this library."""
    return "{{name}} {{version}}"
