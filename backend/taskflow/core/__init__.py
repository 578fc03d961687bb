# taskflow/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- db: Database configuration and connection management
- errors: Error taxonomy shared by all layers
- guard: Request authentication (token -> principal)
- handlers: Translation of errors into HTTP responses
- security: Password hashing and access tokens
"""
