"""Canonical Pydantic models shared across all gas modules.

The models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`Language`, :class:`AccountRecord`, and :class:`AppConfig`.

**Git protocol models** -- parsed from git's credential-helper input:
    :class:`GitRequestContext`.

**Device-flow models** -- transient, never persisted:
    :class:`DeviceFlowSession` plus the provider response shapes
    :class:`DeviceCodeResponse`, :class:`AccessTokenResponse`, and
    :class:`UserResponse`.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class Language(str, enum.Enum):
    """Message language for interactive output."""

    EN = "en"
    JA = "ja"

    @property
    def label(self) -> str:
        """Name of the language in that language."""
        return {Language.EN: "English", Language.JA: "日本語"}[self]


class AccountRecord(BaseModel):
    """One registered account.

    The account's nickname is its key in :attr:`AppConfig.accounts`; the
    secret lives in the secret store under the same nickname and is never
    part of this record.
    """

    username: str = Field(description="Login sent to git as username=")


class AppConfig(BaseModel):
    """The persisted account table and path-rule table.

    ``default_account`` and the values of ``path_rules`` are weak references
    to keys of ``accounts``. Nothing here enforces that they resolve; the
    broker keeps them tidy on removal and treats a dangling reference as
    "no match".

    Example::

        AppConfig(
            default_account="Personal",
            accounts={"Work": AccountRecord(username="jdoe-corp")},
            path_rules={"/home/jdoe/work": "Work"},
        )
    """

    language: Optional[Language] = Field(
        default=None, description="Message language; prompted for when unset"
    )
    default_account: Optional[str] = Field(
        default=None, description="Nickname used when no path rule matches"
    )
    accounts: dict[str, AccountRecord] = Field(
        default_factory=dict, description="nickname -> account"
    )
    path_rules: dict[str, str] = Field(
        default_factory=dict, description="directory prefix -> nickname"
    )


# --- Git credential protocol ---


class GitRequestContext(BaseModel):
    """The attributes git passes to ``credential-helper get``.

    ``protocol`` and ``host`` default to empty strings when git omits them.
    """

    protocol: str = ""
    host: str = ""
    path: Optional[str] = None
    username: Optional[str] = None


# --- Device flow ---


class DeviceFlowSession(BaseModel):
    """State of one device authorization attempt.

    ``device_code`` is a single-use secret and must not be logged.
    """

    device_code: str
    user_code: str
    verification_uri: str
    poll_interval: int = Field(default=5, ge=0, description="Seconds between polls")


class DeviceCodeResponse(BaseModel):
    """Body of the device-code endpoint response."""

    model_config = ConfigDict(extra="ignore")

    device_code: str
    user_code: str
    verification_uri: str
    interval: int = 5
    expires_in: Optional[int] = None


class AccessTokenResponse(BaseModel):
    """Body of the token endpoint response: a token or an error code."""

    model_config = ConfigDict(extra="ignore")

    access_token: Optional[str] = None
    token_type: Optional[str] = None
    scope: Optional[str] = None
    error: Optional[str] = None
    error_description: Optional[str] = None


class UserResponse(BaseModel):
    """The fields of the identity endpoint response that gas uses."""

    model_config = ConfigDict(extra="ignore")

    login: str
