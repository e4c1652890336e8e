"""Toolkit Service: a directory of AI tools backed by a relational store."""

__version__ = "1.0.0"
