"""Service factories for creating test services."""

from factories.regtest import RegtestFactory

__all__ = ["RegtestFactory"]
