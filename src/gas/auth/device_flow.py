"""GitHub OAuth2 Device Authorization Grant (:rfc:`8628`).

Used by ``gas add`` to obtain a token without a local callback server. The
user approves a short code in any browser while this process polls.

Flow:
    1. :meth:`DeviceFlowAuthenticator.request_code` -- POST to the device
       code endpoint, obtaining ``device_code`` + ``user_code``.
    2. The caller shows ``user_code`` and ``verification_uri`` to the user.
    3. :meth:`DeviceFlowAuthenticator.poll` -- POST to the token endpoint
       every ``interval + 1`` seconds until the user approves, denies, the
       code expires, or the attempt budget runs out.
    4. :meth:`DeviceFlowAuthenticator.fetch_identity` -- GET the user's
       login with the new token.

Everything runs synchronously on the calling thread; the only waiting is
``time.sleep`` between polls. One authenticator drives one session at a time.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Any, Callable, Optional, TypeVar

import httpx
from pydantic import BaseModel

from gas.exceptions import (
    AuthDenied,
    AuthExpired,
    AuthTimedOut,
    ConfigurationError,
    ProtocolError,
    TransportError,
)
from gas.models import (
    AccessTokenResponse,
    DeviceCodeResponse,
    DeviceFlowSession,
    UserResponse,
)

logger = logging.getLogger(__name__)

CLIENT_ID = "Ov23li6WaAMnOZW2RXsa"
PLACEHOLDER_CLIENT_ID = "YOUR_CLIENT_ID_HERE"
SCOPE = "repo read:user"

DEVICE_CODE_URL = "https://github.com/login/device/code"
TOKEN_URL = "https://github.com/login/oauth/access_token"
USER_URL = "https://api.github.com/user"
USER_AGENT = "gas-cli"

GRANT_TYPE = "urn:ietf:params:oauth:grant-type:device_code"

MAX_POLL_ATTEMPTS = 100
SLOW_DOWN_COOLDOWN = 5
REQUEST_TIMEOUT = 30.0

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class FlowState(str, enum.Enum):
    """Where a :class:`DeviceFlowAuthenticator` is in its lifecycle."""

    IDLE = "idle"
    CODE_REQUESTED = "code_requested"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    DENIED = "denied"
    EXPIRED = "expired"
    TIMED_OUT = "timed_out"
    TRANSPORT_ERROR = "transport_error"
    PROTOCOL_ERROR = "protocol_error"


class DeviceFlowAuthenticator:
    """Drive the device flow against GitHub (or a compatible provider).

    Args:
        client_id: OAuth application client id. A placeholder or empty value
            makes :meth:`request_code` fail before any network call.
        scope: Space-separated scopes to request.
        device_code_url: Device code endpoint.
        token_url: Token polling endpoint.
        user_url: Identity endpoint returning ``login``.
        max_attempts: Upper bound on token polls before giving up.

    Example::

        auth = DeviceFlowAuthenticator()
        session = auth.request_code()
        print(session.verification_uri, session.user_code)
        token = auth.poll(session.device_code, session.poll_interval)
        username = auth.fetch_identity(token)
    """

    def __init__(
        self,
        client_id: str = CLIENT_ID,
        scope: str = SCOPE,
        device_code_url: str = DEVICE_CODE_URL,
        token_url: str = TOKEN_URL,
        user_url: str = USER_URL,
        max_attempts: int = MAX_POLL_ATTEMPTS,
    ) -> None:
        self.client_id = client_id
        self.scope = scope
        self.device_code_url = device_code_url
        self.token_url = token_url
        self.user_url = user_url
        self.max_attempts = max_attempts
        self.state = FlowState.IDLE
        self.session: Optional[DeviceFlowSession] = None

    def request_code(self) -> DeviceFlowSession:
        """Ask the provider for a device code and a user code.

        Returns:
            The new :class:`~gas.models.DeviceFlowSession`.

        Raises:
            ConfigurationError: If the client id is unset or a placeholder.
            TransportError: If the endpoint is unreachable or answers with a
                non-success status.
            ProtocolError: If the body is not the expected JSON object.
        """
        if not self.client_id or self.client_id == PLACEHOLDER_CLIENT_ID:
            raise ConfigurationError(
                "OAuth client id is not configured. Set GAS_CLIENT_ID to the "
                "client id of a GitHub OAuth app with device flow enabled."
            )

        self.state = FlowState.IDLE
        self.session = None

        response = self._send(
            "POST",
            self.device_code_url,
            "Device code request",
            data={"client_id": self.client_id, "scope": self.scope},
        )
        self._check_status(response, "Device code request")
        body = self._parse(response, DeviceCodeResponse, "device code")

        self.session = DeviceFlowSession(
            device_code=body.device_code,
            user_code=body.user_code,
            verification_uri=body.verification_uri,
            poll_interval=body.interval,
        )
        self.state = FlowState.CODE_REQUESTED
        logger.debug(
            "Device code issued; poll interval %ss, verification at %s",
            body.interval,
            body.verification_uri,
        )
        return self.session

    def poll(self, device_code: str, interval: int) -> str:
        """Poll the token endpoint until the flow reaches a terminal state.

        Each attempt first sleeps ``interval + 1`` seconds. A ``slow_down``
        answer adds a further :data:`SLOW_DOWN_COOLDOWN` seconds before the
        next attempt; ``authorization_pending`` simply continues.

        Args:
            device_code: The code from :meth:`request_code`.
            interval: Provider-dictated polling interval in seconds.

        Returns:
            The access token.

        Raises:
            AuthExpired: The provider reported ``expired_token``.
            AuthDenied: The provider reported any other error code.
            AuthTimedOut: :attr:`max_attempts` polls went unanswered.
            TransportError: Network failure or non-success HTTP status.
            ProtocolError: The body was neither a token nor an error.
        """
        self.state = FlowState.POLLING
        wait = interval + 1
        data = {
            "client_id": self.client_id,
            "device_code": device_code,
            "grant_type": GRANT_TYPE,
        }

        for attempt in range(1, self.max_attempts + 1):
            time.sleep(wait)

            response = self._send("POST", self.token_url, "Token polling", data=data)
            self._check_status(response, "Token polling")
            body = self._parse(response, AccessTokenResponse, "token")

            if body.access_token:
                self.state = FlowState.SUCCEEDED
                self.session = None
                logger.debug("Device flow approved after %d attempt(s)", attempt)
                return body.access_token

            if body.error == "authorization_pending":
                continue
            if body.error == "slow_down":
                logger.debug("Provider asked to slow down; backing off %ss", SLOW_DOWN_COOLDOWN)
                time.sleep(SLOW_DOWN_COOLDOWN)
                continue
            if body.error == "expired_token":
                self.state = FlowState.EXPIRED
                raise AuthExpired("Device code expired -- run the login again")
            if body.error:
                self.state = FlowState.DENIED
                detail = body.error_description or body.error
                raise AuthDenied(f"Authorization failed ({body.error}): {detail}")

            self.state = FlowState.PROTOCOL_ERROR
            raise ProtocolError("Token response has neither 'access_token' nor 'error'")

        self.state = FlowState.TIMED_OUT
        raise AuthTimedOut(
            f"Timed out waiting for authorization after {self.max_attempts} attempts"
        )

    def fetch_identity(self, token: str) -> str:
        """Return the login of the user that owns *token*.

        Raises:
            TransportError: Network failure or non-success HTTP status.
            ProtocolError: The body lacks a ``login`` string.
        """
        response = self._send(
            "GET",
            self.user_url,
            "User lookup",
            headers={
                "Accept": "application/json",
                "Authorization": f"token {token}",
                "User-Agent": USER_AGENT,
            },
        )
        self._check_status(response, "User lookup")
        return self._parse(response, UserResponse, "user").login

    def authenticate(
        self, on_code: Callable[[DeviceFlowSession], None]
    ) -> tuple[str, str]:
        """Run the whole flow and return ``(username, token)``.

        Args:
            on_code: Called once with the session so the caller can show the
                user code and open the verification URI before polling starts.
        """
        session = self.request_code()
        on_code(session)
        token = self.poll(session.device_code, session.poll_interval)
        return self.fetch_identity(token), token

    # ------------------------------------------------------------------ #
    # HTTP helpers
    # ------------------------------------------------------------------ #

    def _send(self, method: str, url: str, what: str, **kwargs: Any) -> httpx.Response:
        kwargs.setdefault("headers", {"Accept": "application/json"})
        try:
            if method == "GET":
                return httpx.get(url, timeout=REQUEST_TIMEOUT, **kwargs)
            return httpx.post(url, timeout=REQUEST_TIMEOUT, **kwargs)
        except httpx.HTTPError as exc:
            self.state = FlowState.TRANSPORT_ERROR
            raise TransportError(f"{what} failed: {exc}") from exc

    def _check_status(self, response: httpx.Response, what: str) -> None:
        if not response.is_success:
            self.state = FlowState.TRANSPORT_ERROR
            raise TransportError(
                f"{what} failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

    def _parse(
        self, response: httpx.Response, model: type[_ModelT], what: str
    ) -> _ModelT:
        # pydantic.ValidationError and json.JSONDecodeError are both ValueErrors
        try:
            return model.model_validate(response.json())
        except ValueError as exc:
            self.state = FlowState.PROTOCOL_ERROR
            raise ProtocolError(f"Unexpected {what} response: {exc}") from exc
