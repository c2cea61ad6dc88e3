"""
Services - the business operations behind the GraphQL resolvers.
"""

from steep.services.accounts import AccountService, AuthOutcome, AuthStatus
from steep.services.teas import TeaService

__all__ = [
    "AccountService",
    "AuthOutcome",
    "AuthStatus",
    "TeaService",
]
