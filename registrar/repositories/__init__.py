"""Persistence adapters."""

from registrar.repositories.users import CredentialStore, SqlAlchemyCredentialStore

__all__ = ["CredentialStore", "SqlAlchemyCredentialStore"]
