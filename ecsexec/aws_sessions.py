import logging
from dataclasses import dataclass, field

import boto3
import botocore.session
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import ConfigError, UpstreamApiError


@dataclass(frozen=True)
class Profile:
    name: str
    config: dict = field(default_factory=dict, compare=False)

    @property
    def region(self):
        return self.config.get("region")


class AWSSessions:
    def __init__(self, botocore_session=None):
        # This is put here due to https://github.com/boto/botocore/issues/1841
        boto3.set_stream_logger(name="botocore.credentials", level=logging.ERROR)

        self.botocore_session = botocore_session
        self._profiles = None

    def load_profiles(self):
        """Read every profile from the shared AWS config and credentials files."""
        if self._profiles is None:
            session = self.botocore_session or botocore.session.Session()
            try:
                raw = session.full_config.get("profiles", {})
            except BotoCoreError as e:
                raise ConfigError(f"Failed to read AWS profiles: {e}")
            self._profiles = {
                name: Profile(name=name, config=dict(values or {}))
                for name, values in raw.items()
            }
        return self._profiles

    def profile_names(self):
        return list(self.load_profiles())

    def get_profile(self, name):
        return self.load_profiles().get(name)

    def create_session(self, credentials=None, region_name=None):
        """
        Build a boto3 session from explicitly bridged credentials, so the ECS
        client never depends on whatever happens to be in os.environ.
        """
        kwargs = {}
        if credentials is not None:
            kwargs.update(
                aws_access_key_id=credentials.access_key_id,
                aws_secret_access_key=credentials.secret_access_key,
                aws_session_token=credentials.session_token,
            )
            region_name = region_name or credentials.region
        if region_name:
            kwargs["region_name"] = region_name
        try:
            return boto3.Session(**kwargs)
        except (BotoCoreError, ClientError) as e:
            raise UpstreamApiError("create a session", cause=e)

    def ecs_client(self, credentials=None, region_name=None):
        session = self.create_session(credentials=credentials, region_name=region_name)
        try:
            return session.client("ecs")
        except BotoCoreError as e:
            raise UpstreamApiError("create an ECS client", cause=e)
