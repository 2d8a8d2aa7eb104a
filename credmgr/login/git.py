"""Version-control login actions."""

from __future__ import annotations

import logging

from credmgr.login.runner import run_cli
from credmgr.vault.models import Credential

logger = logging.getLogger(__name__)


def configure_global_user(cred: Credential, *, git_cli: str = "git") -> None:
    """Set ``user.name`` in the global git config to the credential's username."""
    run_cli([git_cli, "config", "--global", "user.name", cred.principal], step="set git username")
    logger.info("Set global git user.name from credential %r", cred.name)


def gh_login(cred: Credential, *, gh_cli: str = "gh") -> None:
    """Authenticate the GitHub CLI with the stored token (passed on stdin)."""
    run_cli([gh_cli, "auth", "login", "--with-token"], step="log in to GitHub CLI", input=cred.secret)
    logger.info("Logged in to GitHub CLI with credential %r", cred.name)
