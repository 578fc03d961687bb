"""
Services Module

Business logic behind the HTTP routes:
- credentials: account storage, password hashing and verification
- tasks: owner-scoped task CRUD and list filtering
"""
