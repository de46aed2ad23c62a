from dataclasses import dataclass
from enum import Enum
from functools import total_ordering

from .exceptions import TaskParseError

TASK_DEFINITION_MARKER = ":task-definition/"


@total_ordering
class TaskStatus(Enum):
    """ECS task lifecycle stages, declared in lifecycle order."""

    PROVISIONING = "PROVISIONING"
    PENDING = "PENDING"
    ACTIVATING = "ACTIVATING"
    RUNNING = "RUNNING"
    DEACTIVATING = "DEACTIVATING"
    STOPPING = "STOPPING"
    DEPROVISIONING = "DEPROVISIONING"
    STOPPED = "STOPPED"

    def __lt__(self, other):
        if not isinstance(other, TaskStatus):
            return NotImplemented
        members = list(TaskStatus)
        return members.index(self) < members.index(other)

    @classmethod
    def parse(cls, value):
        try:
            return cls[value]
        except (KeyError, TypeError):
            raise TaskParseError(f"Unrecognised task status: {value!r}")

    def pretty(self):
        return "" if self is TaskStatus.RUNNING else f" {self.name}"


@total_ordering
@dataclass(frozen=True)
class Container:
    arn: str
    name: str
    status: str

    def __lt__(self, other):
        if not isinstance(other, Container):
            return NotImplemented
        return self.name < other.name

    def pretty(self):
        if self.status == "RUNNING":
            return self.name
        return f"{self.name} {self.status}"

    @classmethod
    def from_api(cls, record):
        missing = [
            key for key in ("containerArn", "name", "lastStatus") if not record.get(key)
        ]
        if missing:
            raise TaskParseError(
                f"Container {record.get('name', '<unnamed>')!r} is missing {', '.join(missing)}"
            )
        return cls(
            arn=record["containerArn"], name=record["name"], status=record["lastStatus"]
        )


@total_ordering
@dataclass(frozen=True)
class Task:
    name: str
    arn: str
    containers: tuple
    status: TaskStatus

    def __lt__(self, other):
        if not isinstance(other, Task):
            return NotImplemented
        return self.name < other.name

    def friendly_output(self):
        containers = ", ".join(c.pretty() for c in self.containers)
        return f"{self.name}{self.status.pretty()} ({self.arn}) [{containers}]"

    @staticmethod
    def name_from_definition_arn(definition_arn):
        """
        Extract the task definition family from an ARN such as
        arn:aws:ecs:eu-west-1:123456789012:task-definition/my-task:7
        """
        if not definition_arn or TASK_DEFINITION_MARKER not in definition_arn:
            raise TaskParseError(
                f"Task definition ARN {definition_arn!r} has no '{TASK_DEFINITION_MARKER}' segment"
            )
        family_and_revision = definition_arn.split(TASK_DEFINITION_MARKER, 1)[1]
        if ":" not in family_and_revision:
            raise TaskParseError(
                f"Task definition ARN {definition_arn!r} has no revision"
            )
        name = family_and_revision.split(":", 1)[0]
        if not name:
            raise TaskParseError(f"Task definition ARN {definition_arn!r} has no name")
        return name

    @classmethod
    def from_api(cls, record):
        """Convert one entry of a describe_tasks response."""
        name = cls.name_from_definition_arn(record.get("taskDefinitionArn"))

        raw_containers = record.get("containers")
        if not raw_containers:
            raise TaskParseError(f"Task {name!r} has no containers")
        containers = tuple(Container.from_api(c) for c in raw_containers)

        arn = record.get("taskArn")
        if not arn:
            raise TaskParseError(f"Task {name!r} has no task ARN")

        return cls(
            name=name,
            arn=arn,
            containers=containers,
            status=TaskStatus.parse(record.get("lastStatus")),
        )
