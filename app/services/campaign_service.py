# app/services/campaign_service.py
"""
Campaign service - the campaign aggregate and its goals and channels.

Every operation that reads or changes a single campaign loads it fresh,
checks ownership (admins bypass), then mutates and saves the whole
aggregate in one commit.
"""
import logging
from typing import List

from app.core.authorization import ensure_allowed
from app.core.exceptions import DuplicateResourceError, InvalidValueError, NotFoundError
from app.models.campaign import Campaign, CampaignStatus, Channel, Goal, GoalMetric
from app.repositories.campaign_repository import CampaignRepository
from app.schemas.campaign import CampaignCreate, ChannelCreate, GoalCreate
from app.services.stable_service import StableService

log = logging.getLogger("campaigns.campaigns")

ALLOWED_STATUSES = [status.value for status in CampaignStatus]
ALLOWED_GOAL_METRICS = [metric.value for metric in GoalMetric]


def parse_status(value: str) -> CampaignStatus:
    """
    Map a raw status string onto CampaignStatus.

    Raises:
        InvalidValueError: If the value is not one of PLANNED, ACTIVE, COMPLETED
    """
    try:
        return CampaignStatus(value)
    except ValueError:
        raise InvalidValueError(f"Invalid status. Allowed: {ALLOWED_STATUSES}")


def parse_metric(value: str) -> GoalMetric:
    try:
        return GoalMetric(value)
    except ValueError:
        raise InvalidValueError(f"Invalid metric. Allowed: {ALLOWED_GOAL_METRICS}")


class CampaignService:
    """Service for campaign operations"""

    def __init__(self, repository: CampaignRepository, stable_service: StableService):
        self.repository = repository
        self.stable_service = stable_service

    # ────────────────────────────────────────────
    # Create / Read
    # ────────────────────────────────────────────

    def create(self, data: CampaignCreate, username: str, is_admin: bool) -> Campaign:
        """
        Create a campaign owned by ``username``.

        The name must be unique for the owner and the referenced stable must
        exist. Non-admin callers may only attach campaigns to their own stables.
        """
        status = parse_status(data.status)

        if self.repository.find_by_name_and_owner(data.name, username):
            raise DuplicateResourceError("Campaign name already exists for this user")

        stable = self.stable_service.require(data.stable_id)
        ensure_allowed(
            username, is_admin, stable.owner_username,
            f"You are not authorized to use this stable: {data.stable_id}"
        )

        campaign = Campaign(
            name=data.name,
            description=data.description,
            start_date=data.start_date,
            end_date=data.end_date,
            status=status,
            owner_username=username,
            stable_id=stable.id
        )
        saved = self.repository.save(campaign)

        log.info(f"📋 Campaign created: id={saved.id} name='{saved.name}' owner={username} stable={stable.id}")
        return saved

    def get_by_id(self, campaign_id: int, username: str, is_admin: bool) -> Campaign:
        return self._load_authorized(campaign_id, username, is_admin, "Access denied to campaign with id")

    def list_visible(self, username: str, is_admin: bool) -> List[Campaign]:
        """Admins see every campaign; other callers only their own"""
        if is_admin:
            return self.repository.find_all()
        return self.repository.find_by_owner(username)

    def list_by_stable(self, stable_id: int) -> List[Campaign]:
        """
        Campaigns attached to a stable.

        No ownership filter is applied: the caller is expected to have been
        authorized on the stable already.
        """
        return self.repository.find_by_stable_id(stable_id)

    # ────────────────────────────────────────────
    # Mutations
    # ────────────────────────────────────────────

    def delete(self, campaign_id: int, username: str, is_admin: bool) -> None:
        """Delete a campaign together with its goals and channels"""
        campaign = self._load_authorized(campaign_id, username, is_admin, "Access denied to delete campaign with id")
        goal_count, channel_count = len(campaign.goals), len(campaign.channels)
        self.repository.delete(campaign)
        log.info(
            f"🗑️ Campaign deleted: id={campaign_id} by {username} "
            f"({goal_count} goals, {channel_count} channels removed)"
        )

    def update_status(self, campaign_id: int, new_status: str, username: str, is_admin: bool) -> Campaign:
        """
        Overwrite the campaign status.

        Any status in the vocabulary is accepted regardless of the current
        one; there is no forward-only transition rule.
        """
        status = parse_status(new_status)
        campaign = self._load_authorized(campaign_id, username, is_admin, "Access denied to update campaign with id")

        previous = campaign.status
        campaign.update_status(status)
        saved = self.repository.save(campaign)

        log.info(f"🔄 Campaign {campaign_id} status {previous.value} -> {status.value}")
        return saved

    def add_goal(self, campaign_id: int, data: GoalCreate, username: str, is_admin: bool) -> Campaign:
        """
        Append a goal to the campaign.

        Raises:
            InvalidValueError: If the metric is not CLICKS, VIEWS or CONVERSIONS
            DuplicateResourceError: If a goal with the same description exists (case-insensitive)
        """
        campaign = self._load_authorized(campaign_id, username, is_admin, "Access denied to modify campaign with id")
        metric = parse_metric(data.metric)

        wanted = data.description.lower()
        if any(goal.description.lower() == wanted for goal in campaign.goals):
            raise DuplicateResourceError("Goal with the same description already exists in this campaign")

        campaign.add_goal(Goal(
            description=data.description,
            metric=metric,
            target_value=data.target_value,
            current_value=data.current_value
        ))
        campaign.touch()
        saved = self.repository.save(campaign)

        log.info(f"🎯 Goal '{data.description}' added to campaign {campaign_id}")
        return saved

    def add_channel(self, campaign_id: int, data: ChannelCreate, username: str, is_admin: bool) -> Campaign:
        """
        Append a channel to the campaign.

        Raises:
            DuplicateResourceError: If a channel with the same type exists (case-insensitive)
        """
        campaign = self._load_authorized(campaign_id, username, is_admin, "Access denied to modify campaign with id")

        wanted = data.type.lower()
        if any(channel.type.lower() == wanted for channel in campaign.channels):
            raise DuplicateResourceError("Channel with the same type already exists in this campaign")

        campaign.add_channel(Channel(type=data.type, details=data.details))
        campaign.touch()
        saved = self.repository.save(campaign)

        log.info(f"📣 Channel '{data.type}' added to campaign {campaign_id}")
        return saved

    # ────────────────────────────────────────────
    # Children
    # ────────────────────────────────────────────

    def list_goals(self, campaign_id: int, username: str, is_admin: bool) -> List[Goal]:
        self._load_authorized(campaign_id, username, is_admin, "Access denied to view campaign with id")
        return self.repository.find_goals(campaign_id)

    def list_channels(self, campaign_id: int, username: str, is_admin: bool) -> List[Channel]:
        self._load_authorized(campaign_id, username, is_admin, "Access denied to view campaign with id")
        return self.repository.find_channels(campaign_id)

    # ────────────────────────────────────────────
    # Helpers
    # ────────────────────────────────────────────

    def _load_authorized(self, campaign_id: int, username: str, is_admin: bool, denial: str) -> Campaign:
        campaign = self.repository.find_by_id(campaign_id)
        if not campaign:
            raise NotFoundError(f"Campaign not found with id: {campaign_id}")
        ensure_allowed(username, is_admin, campaign.owner_username, f"{denial}: {campaign_id}")
        return campaign
