"""Persistence gateways for Task Service."""
