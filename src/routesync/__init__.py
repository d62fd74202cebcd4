"""Routesync - ingress rule reconciliation and registry build configuration."""

__version__ = "0.1.0"
