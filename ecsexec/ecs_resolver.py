import logging
from dataclasses import dataclass

from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import NotFoundError, UpstreamApiError
from .models import Task
from .selector import pick_one

logger = logging.getLogger(__name__)

CLUSTER_MARKER = ":cluster/"
# DescribeTasks accepts at most 100 task ARNs per call.
DESCRIBE_BATCH_SIZE = 100


@dataclass(frozen=True, order=True)
class ClusterChoice:
    friendly_name: str
    arn: str

    @classmethod
    def from_arn(cls, arn):
        if CLUSTER_MARKER in arn:
            return cls(friendly_name=arn.split(CLUSTER_MARKER, 1)[1], arn=arn)
        return cls(friendly_name=arn, arn=arn)


def _call(operation, method, **kwargs):
    try:
        return method(**kwargs)
    except (BotoCoreError, ClientError) as e:
        raise UpstreamApiError(operation, cause=e)


def _paginate(ecs_client, operation, key, **kwargs):
    items = []
    try:
        for page in ecs_client.get_paginator(operation).paginate(**kwargs):
            items.extend(page.get(key, []))
    except (BotoCoreError, ClientError) as e:
        raise UpstreamApiError(operation.replace("_", " "), cause=e)
    return items


class ClusterResolver:
    def __init__(self, ecs_client, chooser):
        self.ecs = ecs_client
        self.chooser = chooser

    def list_choices(self):
        arns = _paginate(self.ecs, "list_clusters", "clusterArns")
        return sorted(ClusterChoice.from_arn(arn) for arn in arns)

    def resolve(self, cluster=None):
        """Return the explicit cluster verbatim, or the ARN of the one picked."""
        if cluster is not None:
            logger.debug("Using cluster option value: %s", cluster)
            return cluster

        choice = pick_one(
            None,
            self.list_choices,
            label=lambda c: c.friendly_name,
            prompt="Pick your cluster",
            chooser=self.chooser,
            what="clusters",
        )
        return choice.arn


class TaskResolver:
    def __init__(self, ecs_client, chooser):
        self.ecs = ecs_client
        self.chooser = chooser

    def describe(self, cluster, task_arns):
        """Describe tasks and fail on any per-item failure the API reports."""
        records = []
        for start in range(0, len(task_arns), DESCRIBE_BATCH_SIZE):
            result = _call(
                "describe tasks",
                self.ecs.describe_tasks,
                cluster=cluster,
                tasks=task_arns[start : start + DESCRIBE_BATCH_SIZE],
            )
            failures = result.get("failures")
            if failures:
                raise UpstreamApiError("describe tasks", failures=failures)
            records.extend(result.get("tasks", []))
        return records

    def find_task(self, cluster, task):
        records = self.describe(cluster, [task])
        if not records:
            raise NotFoundError("task", task)
        return Task.from_api(records[0])

    def list_tasks(self, cluster):
        task_arns = _paginate(self.ecs, "list_tasks", "taskArns", cluster=cluster)
        if not task_arns:
            raise NotFoundError("tasks", cluster)
        return sorted(Task.from_api(r) for r in self.describe(cluster, task_arns))

    def resolve(self, cluster, task=None):
        if task is not None:
            logger.debug("Looking up task %s in %s", task, cluster)
            return self.find_task(cluster, task)

        return pick_one(
            None,
            lambda: self.list_tasks(cluster),
            label=Task.friendly_output,
            prompt="Pick your task",
            chooser=self.chooser,
            what="tasks",
        )


class ContainerResolver:
    def __init__(self, chooser):
        self.chooser = chooser

    def resolve(self, task, container=None):
        if container is not None:
            for candidate in task.containers:
                if candidate.name == container or candidate.arn == container:
                    return candidate
            raise NotFoundError("container", container)

        return pick_one(
            None,
            lambda: task.containers,
            label=lambda c: c.name,
            prompt="Pick your container",
            chooser=self.chooser,
            what="containers",
            auto_single=True,
        )
