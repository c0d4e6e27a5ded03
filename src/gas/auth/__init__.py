"""Where account secrets come from and where they are kept.

- :class:`SecretStore` -- protocol for the secret backend, with
  :class:`KeyringSecretStore` (OS credential manager) and
  :class:`MemorySecretStore` (in-process) implementations.
- :class:`DeviceFlowAuthenticator` -- the GitHub OAuth device flow that
  turns a browser approval into a ``(username, token)`` pair.

Typical usage::

    from gas.auth import DeviceFlowAuthenticator, KeyringSecretStore, REALM

    username, token = DeviceFlowAuthenticator().authenticate(show_code)
    KeyringSecretStore().set(REALM, "Work", token)
"""

from gas.auth.device_flow import DeviceFlowAuthenticator, FlowState
from gas.auth.secret_store import (
    REALM,
    KeyringSecretStore,
    MemorySecretStore,
    SecretStore,
)

__all__ = [
    "REALM",
    "DeviceFlowAuthenticator",
    "FlowState",
    "KeyringSecretStore",
    "MemorySecretStore",
    "SecretStore",
]
