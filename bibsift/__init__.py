"""Personal research library indexing and full-text search."""

__version__ = "0.4.0"
