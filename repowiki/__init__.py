"""Repowiki: GitHub repository to documentation site generator."""

__version__ = "0.1.0"
