import io
import logging
import os
import subprocess
from collections.abc import Mapping

from dotenv import dotenv_values

from .exceptions import CredentialError, DependencyMissingError

logger = logging.getLogger(__name__)

AWS_PREFIX = "AWS_"
ENV_DUMP_COMMAND = f"env | grep {AWS_PREFIX}"


class VaultCredentials(Mapping):
    """The AWS_* variables aws-vault exposes for one profile."""

    def __init__(self, variables):
        self._variables = dict(variables)

    def __getitem__(self, key):
        return self._variables[key]

    def __iter__(self):
        return iter(self._variables)

    def __len__(self):
        return len(self._variables)

    def __repr__(self):
        return f"VaultCredentials({sorted(self._variables)})"

    @property
    def access_key_id(self):
        return self._variables.get("AWS_ACCESS_KEY_ID")

    @property
    def secret_access_key(self):
        return self._variables.get("AWS_SECRET_ACCESS_KEY")

    @property
    def session_token(self):
        return self._variables.get("AWS_SESSION_TOKEN")

    @property
    def region(self):
        return self._variables.get("AWS_REGION") or self._variables.get(
            "AWS_DEFAULT_REGION"
        )

    def as_environ(self, base=None):
        environ = dict(os.environ if base is None else base)
        environ.update(self._variables)
        return environ


def parse_environment_dump(text):
    """
    Parse the output of `env | grep AWS_` into VaultCredentials.

    One KEY=value assignment per line, read with dotenv rules: surrounding
    quotes are stripped and an unquoted ` #` starts a comment. Lines without a
    value or whose key does not start with AWS_ are ignored. Raises
    CredentialError when nothing usable is left.
    """
    parsed = dotenv_values(stream=io.StringIO(text or ""), interpolate=False)
    variables = {
        key: value
        for key, value in parsed.items()
        if key.startswith(AWS_PREFIX) and value is not None
    }
    if not variables:
        raise CredentialError("Failed to find AWS credentials in the aws-vault output")
    return VaultCredentials(variables)


class CredentialBridge:
    def __init__(self, vault_executable="aws-vault"):
        self.vault_executable = vault_executable

    def _run(self, args, **kwargs):
        try:
            return subprocess.run([self.vault_executable, *args], **kwargs)
        except FileNotFoundError:
            raise DependencyMissingError(
                f"Failed to find {self.vault_executable}. Is it installed and in your PATH?"
            )

    def fetch(self, profile_name):
        logger.debug("Fetching credentials for profile %s", profile_name)
        result = self._run(
            ["exec", profile_name, "--", "sh", "-c", ENV_DUMP_COMMAND],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
        if result.returncode != 0 and not result.stdout.strip():
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise CredentialError(
                f"aws-vault exec for profile '{profile_name}' produced no credentials: {detail}"
            )
        return parse_environment_dump(result.stdout)

    @staticmethod
    def export(credentials, environ=None):
        """Merge the credentials into the process environment, overwriting existing names."""
        target = os.environ if environ is None else environ
        for key, value in credentials.items():
            target[key] = value
        logger.debug("Exported %d AWS variables", len(credentials))

    def bridge(self, profile_name):
        credentials = self.fetch(profile_name)
        self.export(credentials)
        return credentials

    def login(self, profile_name):
        """Open the AWS console for the profile; returns aws-vault's exit code."""
        logger.debug("Running %s login %s", self.vault_executable, profile_name)
        return self._run(["login", profile_name]).returncode
