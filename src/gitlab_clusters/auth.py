"""Authentication providers for gitlab-clusters.

Supports the token kinds the GitLab API accepts:
- PrivateToken: personal, group or project access tokens
- OAuthToken: OAuth2 bearer tokens
- JobToken: CI/CD job tokens (CI_JOB_TOKEN)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class AuthProvider(ABC):
    """Base authentication provider interface.

    All authentication methods must implement this interface.
    """

    @abstractmethod
    def get_headers(self) -> dict[str, str]:
        """Return authentication headers for requests.

        Returns:
            Dictionary of headers to include in requests.
        """
        ...

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        """Check if credentials are available.

        Returns:
            True if a token is present.
        """
        ...


@dataclass
class PrivateTokenAuth(AuthProvider):
    """Access token authentication.

    Example:
        ```python
        auth = PrivateTokenAuth(token="glpat-...")
        client = GitLabClient(auth=auth)
        ```

    Attributes:
        token: Personal, group or project access token.
    """

    token: str = field(repr=False)  # Never log tokens

    def get_headers(self) -> dict[str, str]:
        """Return the PRIVATE-TOKEN header."""
        return {"PRIVATE-TOKEN": self.token}

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


@dataclass
class OAuthTokenAuth(AuthProvider):
    """OAuth2 bearer token authentication.

    Attributes:
        token: OAuth2 access token.
    """

    token: str = field(repr=False)

    def get_headers(self) -> dict[str, str]:
        """Return Authorization Bearer header."""
        return {"Authorization": f"Bearer {self.token}"}

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


@dataclass
class JobTokenAuth(AuthProvider):
    """CI/CD job token authentication.

    Only a subset of endpoints honour job tokens; the server answers 401
    or 403 for the rest.

    Attributes:
        token: Value of CI_JOB_TOKEN.
    """

    token: str = field(repr=False)

    def get_headers(self) -> dict[str, str]:
        """Return the JOB-TOKEN header."""
        return {"JOB-TOKEN": self.token}

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)
