import logging

from .exceptions import NotFoundError
from .selector import pick_one

logger = logging.getLogger(__name__)

RESERVED_PROFILE = "default"


class IdentityResolver:
    def __init__(self, aws_sessions, chooser):
        self.aws_sessions = aws_sessions
        self.chooser = chooser

    def candidate_names(self):
        return sorted(
            name for name in self.aws_sessions.profile_names() if name != RESERVED_PROFILE
        )

    def resolve(self, profile_name=None):
        """Return the Profile named explicitly, or the one the operator picks."""
        name = pick_one(
            profile_name,
            self.candidate_names,
            label=str,
            prompt="Pick your environment",
            chooser=self.chooser,
            what="AWS profile",
        )

        profile = self.aws_sessions.get_profile(name)
        if profile is None:
            raise NotFoundError("AWS profile", name)
        logger.debug("Resolved profile %s", profile.name)
        return profile
