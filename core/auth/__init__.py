from .session import AuthClient, Identity, SessionContext

__all__ = ['AuthClient', 'Identity', 'SessionContext']
