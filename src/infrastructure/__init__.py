"""Infrastructure Layer.

Adapters that perform I/O (files, environment) and return domain Value Objects.
"""
