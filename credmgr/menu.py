"""
Interactive menu — the prompt loop around the credential store.

Every action asks for the PIN, runs one store operation, and reports typed
failures as one-line messages. Input functions are injectable so tests can
script a session.
"""

from __future__ import annotations

import getpass
import logging
from collections.abc import Callable

from pydantic import ValidationError

from credmgr.config import Config
from credmgr.login import LoginError
from credmgr.login import aws as aws_login
from credmgr.login import git as git_login
from credmgr.vault import Credential, CredentialKind, CredentialStore, VaultError

logger = logging.getLogger(__name__)


class Menu:
    """Prompt-driven front end over a CredentialStore."""

    def __init__(
        self,
        store: CredentialStore,
        config: Config,
        *,
        prompt: Callable[[str], str] = input,
        secret_prompt: Callable[[str], str] = getpass.getpass,
        out: Callable[[str], None] = print,
    ):
        self.store = store
        self.config = config
        self._prompt = prompt
        self._secret_prompt = secret_prompt
        self._out = out

    # ─── Input helpers ───────────────────────────────────────────────────

    def _ask(self, text: str) -> str:
        return self._prompt(text).strip()

    def _ask_secret(self, text: str) -> str:
        return self._secret_prompt(text)

    def _ask_pin(self, text: str = "Enter PIN to access credentials: ") -> str | None:
        pin = self._ask_secret(text)
        if not pin:
            self._out("PIN cannot be empty")
            return None
        return pin

    def _choose(self, text: str, count: int) -> int | None:
        """Ask for a 1-based selection. Returns the 0-based index or None."""
        choice = self._ask(text)
        if choice in ("", "q"):
            return None
        try:
            selected = int(choice)
        except ValueError:
            selected = 0
        if not 1 <= selected <= count:
            self._out("Invalid selection")
            return None
        return selected - 1

    def _show(self, credentials: list[Credential]) -> None:
        for i, cred in enumerate(credentials, start=1):
            self._out(f"{i}. {cred.label}")

    # ─── Main loop ───────────────────────────────────────────────────────

    def run(self) -> int:
        actions = {
            "1": self.add_credential,
            "2": self.list_and_login,
            "3": self.delete_credential,
        }
        while True:
            self._out("\n=== Credential Manager ===")
            self._out("1. Add credential")
            self._out("2. List & Login")
            self._out("3. Delete credential")
            self._out("4. Exit")
            try:
                choice = self._ask("\nChoose option (1-4): ")
                if choice == "4":
                    self._out("Goodbye!")
                    return 0
                action = actions.get(choice)
                if action is None:
                    self._out("Invalid option. Please choose 1-4.")
                    continue
                action()
            except EOFError:
                self._out("")
                return 0
            except VaultError as e:
                logger.debug("Store operation failed: %s", type(e).__name__)
                self._out(f"Error: {e}")
            except LoginError as e:
                self._out(str(e))

    # ─── Actions ─────────────────────────────────────────────────────────

    def add_credential(self) -> None:
        self._out("\n=== Add New Credential ===")

        try:
            kind = CredentialKind(self._ask("Type (aws/git): "))
        except ValueError:
            self._out("Invalid type. Must be 'aws' or 'git'")
            return

        name = self._ask("Name (e.g., aws-project1, github-self): ")
        if not name:
            self._out("Name cannot be empty")
            return

        auxiliary = ""
        if kind is CredentialKind.CLOUD_ACCESS:
            principal = self._ask("AWS Access Key ID: ")
            secret = self._ask_secret("AWS Secret Access Key: ")
            auxiliary = self._ask("AWS Region (optional): ")
        else:
            principal = self._ask("Git Username: ")
            secret = self._ask_secret("Git Password/Token: ")

        pin = self._ask_pin("Enter PIN to encrypt credentials: ")
        if pin is None:
            return

        try:
            candidate = Credential(
                kind=kind, name=name, principal=principal, secret=secret, auxiliary=auxiliary
            )
        except ValidationError:
            self._out("Invalid credential")
            return

        self.store.add(pin, candidate)
        self._out("Credential added successfully!")

    def list_and_login(self) -> None:
        pin = self._ask_pin()
        if pin is None:
            return

        credentials = self.store.list(pin)
        if not credentials:
            self._out("No credentials found")
            return

        self._out("\n=== Available Credentials ===")
        self._show(credentials)
        index = self._choose("\nEnter number to login (or 'q' to quit): ", len(credentials))
        if index is None:
            return
        self.login(credentials[index])

    def delete_credential(self) -> None:
        pin = self._ask_pin()
        if pin is None:
            return

        credentials = self.store.list(pin)
        if not credentials:
            self._out("No credentials found")
            return

        self._out("\n=== Delete Credential ===")
        self._show(credentials)
        index = self._choose("\nEnter number to delete (or 'q' to quit): ", len(credentials))
        if index is None:
            return

        target = credentials[index]
        confirm = self._ask(f"Are you sure you want to delete '{target.name}'? (y/N): ")
        if confirm.lower() not in ("y", "yes"):
            self._out("Deletion cancelled")
            return

        # by name: the file may have changed since the list was shown
        removed = self.store.remove(pin, target.name)
        self._out(f"Credential '{removed.name}' deleted successfully!")

    # ─── Login ───────────────────────────────────────────────────────────

    def login(self, cred: Credential) -> None:
        self._out(f"\nLogging in with {cred.name}...")
        if cred.kind is CredentialKind.CLOUD_ACCESS:
            self._aws_login(cred)
        else:
            self._git_login(cred)

    def _aws_login(self, cred: Credential) -> None:
        self._out("AWS Login Options:")
        self._out("1. Configure AWS CLI profile")
        self._out("2. Export environment variables (script)")
        self._out("3. Launch shell with credentials")
        self._out("4. Test connection only")
        choice = self._ask("Choose option (1-4): ")
        aws_cli = self.config.aws_cli

        if choice == "1":
            profile = self._ask(f"Enter AWS profile name (default: {cred.name}): ") or cred.name
            aws_login.configure_profile(cred, profile, aws_cli=aws_cli)
            self._out(f"AWS profile '{profile}' configured successfully!")
            self._out(f"Use with: aws --profile {profile} <command>")
            self._out("\nTesting profile...")
            try:
                identity = aws_login.verify_identity(cred, profile=profile, aws_cli=aws_cli)
            except LoginError as e:
                self._out(f"Profile test failed: {e.detail}")
            else:
                self._out("Profile test successful!")
                self._out(f"Identity: {identity}")
        elif choice == "2":
            path = aws_login.write_env_script(cred)
            self._out(f"Environment script created: {path}")
            if path.suffix == ".bat":
                self._out(f"Run: {path.name}")
            else:
                self._out(f"Run: source {path.name}")
        elif choice == "3":
            self._out("AWS credentials are available in this shell session")
            self._out("Type 'exit' to return to credential manager")
            aws_login.launch_shell(cred, self.config.shell)
        elif choice == "4":
            self._out("Testing AWS connection...")
            identity = aws_login.verify_identity(cred, aws_cli=aws_cli)
            self._out("AWS connection successful!")
            self._out(f"Identity: {identity}")
        else:
            self._out("Invalid option")

    def _git_login(self, cred: Credential) -> None:
        self._out("Available Git login options:")
        self._out("1. Set global git credentials")
        self._out("2. Login to GitHub CLI (if installed)")
        choice = self._ask("Choose option (1-2): ")

        if choice == "1":
            git_login.configure_global_user(cred, git_cli=self.config.git_cli)
            self._out("Git username configured globally")
            self._out("Note: For HTTPS authentication, use the token as password when prompted")
        elif choice == "2":
            self._out("Attempting GitHub CLI login...")
            git_login.gh_login(cred, gh_cli=self.config.gh_cli)
            self._out("GitHub CLI login successful!")
        else:
            self._out("Invalid option")
