"""
Base loader interface and common implementations.

A loader moves one entity kind between the feed tabs of the workbook and the
advertising API. Loaders are external collaborators: the bridge only selects
one by entity tag and hands it the job. Every method mutates the job in place
(e.g. fills `idsToLoad`, or sets `logs` on sub-jobs).
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any


class Entity(str, Enum):
    """
    Entity kinds handled by the bulk editor.

    Values are the tags the sidebar sends in `job.entity`.
    """
    CAMPAIGN = "Campaign"
    EVENT_TAG = "EventTag"
    PLACEMENT_GROUP = "PlacementGroup"
    PLACEMENT = "Placement"
    CREATIVE = "Creative"
    CREATIVE_ASSET = "CreativeAsset"
    AD = "Ad"
    LANDING_PAGE = "LandingPage"
    ADVERTISER_LANDING_PAGE = "AdvertiserLandingPage"
    TRANSCODE_CONFIG = "TranscodeConfig"


class Loader(ABC):
    """Abstract base class for entity loaders."""

    @abstractmethod
    def identify_items_to_load(self, job: dict[str, Any]) -> None:
        """Populate `job["idsToLoad"]` from the ids the user specified in the feed."""
        pass

    @abstractmethod
    def load(self, job: dict[str, Any]) -> None:
        """
        Fetch items from the API, map them to feed rows and write them to the tab.

        Reads `job["idsToLoad"]` and `job["parentItemIds"]`.
        """
        pass

    @abstractmethod
    def push(self, job: dict[str, Any]) -> None:
        """Insert or update the item described by `job["feedItem"]`."""
        pass

    @abstractmethod
    def update_feed(self, job: dict[str, Any]) -> None:
        """Write `job["feed"]` back to the tab after a push."""
        pass

    @abstractmethod
    def create_push_jobs(self, job: dict[str, Any]) -> None:
        """Split the entity's feed into sub-jobs under `job["jobs"]`."""
        pass


class NoOpLoader(Loader):
    """
    No-op loader for testing and dry-run mode.

    Leaves every job untouched.
    """

    def identify_items_to_load(self, job: dict[str, Any]) -> None:
        pass

    def load(self, job: dict[str, Any]) -> None:
        pass

    def push(self, job: dict[str, Any]) -> None:
        pass

    def update_feed(self, job: dict[str, Any]) -> None:
        pass

    def create_push_jobs(self, job: dict[str, Any]) -> None:
        pass
