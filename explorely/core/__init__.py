"""Core domain layer: exceptions, password hashing, authentication and deletion policy."""
