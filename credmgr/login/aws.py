"""
Cloud-access login actions — hand a stored key pair to the AWS CLI or a shell.

Usage:
    from credmgr.login import aws
    profile = aws.configure_profile(cred)
    print(aws.verify_identity(cred, profile=profile))
"""

from __future__ import annotations

import logging
import os
import platform
import shlex
import stat
import subprocess
from pathlib import Path

from credmgr.login.runner import LoginError, run_cli
from credmgr.vault.models import Credential

logger = logging.getLogger(__name__)

IDENTITY_TIMEOUT = 30  # seconds; sts is the only network-bound call


def credential_env(cred: Credential) -> dict[str, str]:
    """Environment variables the AWS SDKs and CLI read credentials from."""
    env = {
        "AWS_ACCESS_KEY_ID": cred.principal,
        "AWS_SECRET_ACCESS_KEY": cred.secret,
    }
    if cred.auxiliary:
        env["AWS_DEFAULT_REGION"] = cred.auxiliary
    return env


def configure_profile(cred: Credential, profile: str | None = None, *, aws_cli: str = "aws") -> str:
    """Write the credential into a named AWS CLI profile. Returns the profile name."""
    profile = profile or cred.name
    run_cli(
        [aws_cli, "configure", "set", "aws_access_key_id", cred.principal, "--profile", profile],
        step="set access key",
    )
    run_cli(
        [aws_cli, "configure", "set", "aws_secret_access_key", cred.secret, "--profile", profile],
        step="set secret key",
    )
    if cred.auxiliary:
        run_cli(
            [aws_cli, "configure", "set", "region", cred.auxiliary, "--profile", profile],
            step="set region",
        )
    logger.info("Configured AWS profile %r from credential %r", profile, cred.name)
    return profile


def verify_identity(
    cred: Credential, profile: str | None = None, *, aws_cli: str = "aws"
) -> str:
    """Call ``sts get-caller-identity`` and return its output.

    With a profile the CLI reads its own config; otherwise the credential is
    injected through the environment.
    """
    if profile:
        argv = [aws_cli, "sts", "get-caller-identity", "--profile", profile]
        env = None
    else:
        argv = [aws_cli, "sts", "get-caller-identity"]
        env = {**os.environ, **credential_env(cred)}
    result = run_cli(argv, step="verify AWS identity", env=env, timeout=IDENTITY_TIMEOUT)
    return result.stdout


def render_env_script(cred: Credential, windows: bool = False) -> tuple[str, str]:
    """Build an environment script for the credential. Returns (filename, content)."""
    env = credential_env(cred)
    if windows:
        lines = ["@echo off"]
        # quoted form keeps & | ^ literal; %% is a literal percent in a batch file
        lines += [f'set "{key}={value.replace("%", "%%")}"' for key, value in env.items()]
        lines += [
            "echo AWS credentials set in environment",
            "echo Run this script or copy these commands to your terminal",
            "pause",
        ]
        return "aws_env.bat", "\r\n".join(lines) + "\r\n"

    lines = ["#!/bin/bash"]
    lines += [f"export {key}={shlex.quote(value)}" for key, value in env.items()]
    lines += [
        'echo "AWS credentials exported to environment"',
        'echo "Run: source aws_env.sh"',
    ]
    return "aws_env.sh", "\n".join(lines) + "\n"


def write_env_script(
    cred: Credential, directory: Path | str = ".", windows: bool | None = None
) -> Path:
    """Write the environment script, readable by the owner only. Returns its path."""
    if windows is None:
        windows = platform.system() == "Windows"
    filename, content = render_env_script(cred, windows=windows)
    path = Path(directory) / filename

    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, stat.S_IRUSR | stat.S_IWUSR)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        # the file may have existed with wider permissions
        os.chmod(path, stat.S_IRUSR | stat.S_IWUSR if windows else stat.S_IRWXU)
    except OSError as e:
        raise LoginError("create script", str(e)) from e

    logger.info("Wrote AWS environment script %s", path)
    return path


def launch_shell(cred: Credential, shell: str) -> int:
    """Run an interactive shell with the credential in its environment. Returns its exit code."""
    env = {**os.environ, **credential_env(cred)}
    try:
        return subprocess.run([shell], env=env).returncode
    except FileNotFoundError as e:
        raise LoginError("launch shell", f"'{shell}' not found") from e
    except OSError as e:
        raise LoginError("launch shell", f"could not run '{shell}': {e.strerror or e}") from e
