"""
Login integrations — hand a decrypted credential to an external CLI.

    credmgr.login.aws   configure_profile, verify_identity, write_env_script, launch_shell
    credmgr.login.git   configure_global_user, gh_login
"""

from __future__ import annotations

from credmgr.login.runner import LoginError

__all__ = ["LoginError"]
