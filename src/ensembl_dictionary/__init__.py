"""Ensembl gene dictionary backed by the EBI Search REST service."""

__version__ = "0.1.0"
