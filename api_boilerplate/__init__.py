"""API Boilerplate - a FastAPI starting point for JSON REST services.

The package wires an async HTTP layer to a relational database through
SQLAlchemy and ships the pieces every CRUD service ends up rewriting:

- **API Layer**: application factory, static route table, middleware and
  centralized exception handlers producing one response envelope
- **Core Layer**: configuration, logging, request context, the AppError
  family and the declarative body validator
- **Infrastructure Layer**: async engine/session management and a generic
  repository
- **Users**: an example resource showing how a service, a repository and a
  router fit together

New resources follow the users package: an ORM model, a repository, a
service holding the business checks and a router registered in
``api_boilerplate.api.routes``.
"""
