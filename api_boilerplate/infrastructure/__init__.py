"""Infrastructure layer: data persistence and other external integrations.

Services depend on repositories defined here rather than on the ORM
session directly, which keeps them testable with fakes.
"""
