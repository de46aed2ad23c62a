import logging
import shutil

from .exceptions import DependencyMissingError

logger = logging.getLogger(__name__)

SESSION_MANAGER_PLUGIN = "session-manager-plugin"


class ConfigChecker:
    def __init__(self, vault_executable="aws-vault", aws_executable="aws"):
        self.vault_executable = vault_executable
        self.aws_executable = aws_executable

    @staticmethod
    def is_installed(executable):
        """Check if an executable is on PATH."""
        return shutil.which(executable) is not None

    def validate_all(self):
        """Perform all dependency checks."""
        return {
            "vault": self.is_installed(self.vault_executable),
            "aws_cli": self.is_installed(self.aws_executable),
            "session_manager_plugin": self.is_installed(SESSION_MANAGER_PLUGIN),
        }

    def confirm_dependencies(self, require_session_plugin=False):
        results = self.validate_all()
        if not results["vault"]:
            raise DependencyMissingError(
                f"Failed to find {self.vault_executable}. Is it installed and in your PATH?"
            )
        if not results["aws_cli"]:
            raise DependencyMissingError(
                f"Failed to find the AWS CLI ({self.aws_executable}). Is it installed and in your PATH?"
            )
        if require_session_plugin and not results["session_manager_plugin"]:
            logger.warning(
                "%s was not found in PATH; 'aws ecs execute-command' will likely fail",
                SESSION_MANAGER_PLUGIN,
            )
        return results
