"""Core package: configuration, exceptions and authentication."""
