"""Retrieval-augmented question answering over a document corpus."""

__version__ = "0.1.0"
