# cli/commands/token.py
import click
from core.sa.database import Database
from typing import Optional
from core.auth import AuthClient
from core.config import get_settings
from core.exceptions import AuthError
from core.sa.repositories import SessionRepository

@click.group()
def token():
    """Bearer token commands"""
    pass

@token.command()
@click.argument('user_id')
@click.option('--email', default=None, help='Email claim to embed')
@click.option('--expires-in', default=None, type=int, help='Lifetime in seconds (defaults to BOOKNEST_TOKEN_TTL)')
def issue(user_id: str, email: Optional[str], expires_in: Optional[int]):
    """Issue a bearer token for USER_ID

    Example:
        booknest token issue reader-1 --expires-in 86400
    """
    settings = get_settings()
    database = Database()
    session = database.get_session()
    try:
        auth = AuthClient(settings.jwt_secret, SessionRepository(session), algorithm=settings.jwt_algorithm)
        click.echo(auth.issue_token(user_id, expires_in=expires_in or settings.token_ttl, email=email))
    except AuthError as e:
        raise click.ClickException(str(e))
    finally:
        session.close()
        database.dispose()
