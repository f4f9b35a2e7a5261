"""Pydantic models describing what the API sends to clients.

Every response body is an ``ApiResponse`` envelope; resource packages define
the models placed in its ``data`` field.
"""
