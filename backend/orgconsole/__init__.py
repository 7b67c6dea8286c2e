"""Organization console backend — management records and Drive file administration."""

__version__ = "0.3.0"
