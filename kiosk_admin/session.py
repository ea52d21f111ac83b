"""
Session Management

Holds the operator's bearer credentials (access + refresh token).

The console writes the tokens to two places: a local token store, read
by the console itself when it calls the backend, and the `accessToken` /
`refreshToken` cookies (path=/), so that browser-rendered routes see the
same session. Callers only ever use get/set/clear; the dual write is an
internal detail of SessionManager.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from fastapi import Request, Response
from pydantic import ValidationError

from kiosk_admin.schemas import SessionTokens

logger = logging.getLogger(__name__)


class TokenStore(ABC):
    """Local token storage backend."""

    @abstractmethod
    def load(self) -> Optional[SessionTokens]:
        pass

    @abstractmethod
    def save(self, tokens: SessionTokens) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class FileTokenStore(TokenStore):
    """Token store persisted as a small JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Optional[SessionTokens]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return SessionTokens.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return None

    def save(self, tokens: SessionTokens) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(tokens.model_dump(by_alias=True)),
            encoding="utf-8",
        )

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class SessionManager:
    """
    Single entry point for session tokens.

    Example:
        >>> session = SessionManager(FileTokenStore("data/session.json"))
        >>> session.set(tokens, response)   # store + Set-Cookie
        >>> session.access_token
        'eyJhbGciOi...'
        >>> session.clear(response)         # store + expired cookies
    """

    def __init__(
        self,
        store: TokenStore,
        access_cookie: str = "accessToken",
        refresh_cookie: str = "refreshToken",
    ):
        self._store = store
        self.access_cookie = access_cookie
        self.refresh_cookie = refresh_cookie

    def get(self, request: Optional[Request] = None) -> Optional[SessionTokens]:
        """
        Return the current tokens.

        The local store wins; when it is empty the request's cookies are
        used and copied back into the store.
        """
        tokens = self._store.load()
        if tokens is not None or request is None:
            return tokens

        access = request.cookies.get(self.access_cookie)
        if not access:
            return None

        tokens = SessionTokens(
            access_token=access,
            refresh_token=request.cookies.get(self.refresh_cookie),
        )
        self._store.save(tokens)
        logger.debug("Session restored from cookies")
        return tokens

    def set(self, tokens: SessionTokens, response: Optional[Response] = None) -> None:
        self._store.save(tokens)
        if response is not None:
            response.set_cookie(self.access_cookie, tokens.access_token, path="/")
            if tokens.refresh_token:
                response.set_cookie(self.refresh_cookie, tokens.refresh_token, path="/")
        logger.info("Session stored")

    def clear(self, response: Optional[Response] = None) -> None:
        self._store.clear()
        if response is not None:
            response.delete_cookie(self.access_cookie, path="/")
            response.delete_cookie(self.refresh_cookie, path="/")
        logger.info("Session cleared")

    @property
    def access_token(self) -> Optional[str]:
        tokens = self._store.load()
        return tokens.access_token if tokens else None
