import logging
import subprocess

from .exceptions import DependencyMissingError

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "/usr/bin/env bash"


class ExecSession:
    """Interactive `aws ecs execute-command` session in one container."""

    def __init__(
        self,
        cluster: str,
        task,
        container,
        command: str = DEFAULT_COMMAND,
        region: str = None,
        credentials=None,
        aws_executable: str = "aws",
    ):
        self.cluster = cluster
        self.task = task
        self.container = container
        self.command = command
        self.region = region
        self.credentials = credentials
        self.aws_executable = aws_executable

    def build_args(self):
        args = [self.aws_executable, "ecs", "execute-command"]
        if self.region:
            args += ["--region", self.region]
        args += [
            "--cluster", self.cluster,
            "--task", self.task.arn,
            "--container", self.container.name,
            "--command", self.command,
            "--interactive",
        ]
        return args

    def build_env(self):
        if self.credentials is None:
            return None
        return self.credentials.as_environ()

    def run(self):
        """Run the session in the foreground and return its exit code."""
        args = self.build_args()
        logger.info(
            "Starting '%s' in %s/%s", self.command, self.task.name, self.container.name
        )
        logger.debug("Running: %s", args)
        try:
            result = subprocess.run(args, env=self.build_env())
        except FileNotFoundError:
            raise DependencyMissingError(
                f"Failed to find the AWS CLI ({self.aws_executable}). Is it installed and in your PATH?"
            )
        return result.returncode
