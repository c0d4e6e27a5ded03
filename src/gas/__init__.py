"""gas -- Git Account Switcher.

Answers git's credential-helper protocol with the account that applies to the
current working directory. Accounts are registered once (by GitHub device
flow or a pasted personal access token); their secrets live in the OS
keyring and their usernames and directory bindings in a small JSON config.

Typical workflow::

    gas setup          # register gas as git's credential helper
    gas add Work       # log in through the browser
    cd ~/work && gas use Work
    git push           # git asks `gas get`, which answers for "Work"

Modules:
    app: Typer application and CLI entry point.
    broker: Account resolution and credential emission.
    resolver: Longest-prefix directory rule matching.
    auth: Secret storage and the OAuth device flow.
    config: XDG-aware persistence of :class:`~gas.models.AppConfig`.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.3.0"
