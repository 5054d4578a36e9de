"""Desktop browser for the Star Wars film catalog."""

__version__ = "0.1.0"
