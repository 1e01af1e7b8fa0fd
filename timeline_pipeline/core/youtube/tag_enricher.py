"""
Channel Tag Enricher
Looks up topic categories for each channel through the YouTube Data API.
"""

import logging
from pathlib import Path
from typing import List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..stats.channel import Channel
from .channel_tags import ChannelTags

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/youtube.readonly']


class TagEnrichmentError(Exception):
    """Raised when a tag lookup fails (API, auth or transport error)."""
    pass


class TagEnricher:
    """
    YouTube Data API client for channel topic categories.
    """

    def __init__(self, service):
        self._service = service

    @classmethod
    def from_credentials_file(cls, credentials_file: Path) -> "TagEnricher":
        """Authenticate with a Google service account key file."""
        creds = service_account.Credentials.from_service_account_file(str(credentials_file), scopes=SCOPES)
        # static_discovery=False prevents the 'file_cache' warning in logs
        return cls(build('youtube', 'v3', credentials=creds, static_discovery=False))

    def fetch_tags(self, channel: Channel) -> Optional[ChannelTags]:
        """
        Topic categories for one channel.

        Returns:
            ChannelTags, or None if YouTube does not know the channel.

        Raises:
            TagEnrichmentError: On any API, credential or network error
        """
        try:
            response = self._service.channels().list(
                part="snippet,topicDetails",
                id=channel.id
            ).execute()
        except HttpError as e:
            raise TagEnrichmentError(f"API error while fetching tags for {channel.id}: {e}")
        except GoogleAuthError as e:
            raise TagEnrichmentError(f"Authentication failed while fetching tags for {channel.id}: {e}")
        except (httplib2.HttpLib2Error, OSError) as e:
            raise TagEnrichmentError(f"Network error while fetching tags for {channel.id}: {e}")

        items = response.get("items", [])
        if not items:
            logger.warning(f"Channel not found on YouTube, skipping tags: {channel.id}")
            return None

        data = items[0]
        topics = (data.get("topicDetails") or {}).get("topicCategories", [])
        return ChannelTags(id=data.get("id", channel.id), name=channel.title, tags=list(topics))

    def fetch_all(self, channels: List[Channel]) -> List[ChannelTags]:
        logger.info(f"Fetching tags for {len(channels)} channels")
        tags = []
        for channel in channels:
            channel_tags = self.fetch_tags(channel)
            if channel_tags is not None:
                tags.append(channel_tags)
        return tags
