"""Udyam MSME registration wizard - schema-driven form engine and registration service."""

__version__ = "0.1.0"
