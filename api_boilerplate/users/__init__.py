"""The users resource: model, validation schemas, service and routes."""
