# core/navigation.py
from dataclasses import dataclass

LANDING_PATH = "/"
SIGN_IN_PATH = "/auth"
LIBRARY_PATH = "/library"


def book_path(book_id: str) -> str:
    """Path of the reader view for a book"""
    return f"/book/{book_id}"


@dataclass(frozen=True)
class Redirect:
    """Tells the client to leave the current view."""
    path: str
