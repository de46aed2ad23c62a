import argparse
import logging
import sys

from . import __version__
from .aws_sessions import AWSSessions
from .checker import ConfigChecker
from .config_loader import ConfigLoader
from .ecs_resolver import ClusterResolver, ContainerResolver, TaskResolver
from .exceptions import EcsExecError
from .identity_resolver import IdentityResolver
from .selector import TerminalMenu
from .session import ExecSession
from .vault import CredentialBridge

logger = logging.getLogger("ecsexec")


def add_environment_argument(parser):
    parser.add_argument(
        "--environment",
        "--profile",
        "-e",
        "-p",
        dest="environment",
        metavar="NAME",
        help="Name of the environment to connect to (or profile to use)",
    )


def parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="ecsexec",
        description="Pick an aws-vault profile and open a shell in an ECS container.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING, or log_level from the config file)",
    )
    parser.add_argument(
        "--config",
        dest="config",
        metavar="PATH",
        help="Path to a JSON configuration file",
    )

    subparsers = parser.add_subparsers(dest="action", required=True)

    login = subparsers.add_parser("login", help="Logs in to AWS")
    add_environment_argument(login)

    execute = subparsers.add_parser("execute", help="Execute bash in an ECS container")
    add_environment_argument(execute)
    execute.add_argument(
        "--container", "--con", dest="container", help="Name of the container to connect to"
    )
    execute.add_argument("--cluster", "-c", dest="cluster", help="Name of the cluster to connect to")
    execute.add_argument("--region", "-r", dest="region", help="Name of the region to connect to")
    execute.add_argument(
        "--command",
        dest="command",
        help="Command to run in the container (default: /usr/bin/env bash)",
    )
    execute.add_argument("task", nargs="?", help="The ECS task to connect to")

    return parser.parse_args(argv)


def configure_logging(level):
    logging.basicConfig(level=getattr(logging, level), format="%(levelname)s: %(message)s")


def run_login(args, config, identity_resolver, bridge):
    profile = identity_resolver.resolve(args.environment or config["default_profile"])
    return bridge.login(profile.name)


def run_execute(args, config, identity_resolver, bridge, aws_sessions, chooser):
    profile = identity_resolver.resolve(args.environment or config["default_profile"])
    credentials = bridge.bridge(profile.name)

    region = args.region or credentials.region or profile.region or config["region"]
    ecs_client = aws_sessions.ecs_client(credentials=credentials, region_name=region)

    cluster = ClusterResolver(ecs_client, chooser).resolve(args.cluster)
    task = TaskResolver(ecs_client, chooser).resolve(cluster, args.task)
    container = ContainerResolver(chooser).resolve(task, args.container)

    session = ExecSession(
        cluster,
        task,
        container,
        command=args.command or config["command"],
        region=region,
        credentials=credentials,
        aws_executable=config["aws_executable"],
    )
    return session.run()


def main(argv=None):
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        config = ConfigLoader(args.config).load_config()
    except EcsExecError as e:
        configure_logging(args.log_level or "WARNING")
        logger.error(e)
        return 1

    configure_logging(args.log_level or config["log_level"])

    try:
        ConfigChecker(
            vault_executable=config["vault_executable"],
            aws_executable=config["aws_executable"],
        ).confirm_dependencies(require_session_plugin=args.action == "execute")

        aws_sessions = AWSSessions()
        chooser = TerminalMenu()
        identity_resolver = IdentityResolver(aws_sessions, chooser)
        bridge = CredentialBridge(vault_executable=config["vault_executable"])

        if args.action == "login":
            return run_login(args, config, identity_resolver, bridge)
        return run_execute(args, config, identity_resolver, bridge, aws_sessions, chooser)
    except EcsExecError as e:
        logger.error(e)
        return 1
    except (KeyboardInterrupt, EOFError):
        logger.warning("Aborted")
        return 130
