"""AWS session building."""

from __future__ import annotations

import logging

import boto3
import botocore.exceptions

from ...exceptions import AuthFailure

LOGGER = logging.getLogger(__name__)


def get_session(region: str | None = None, profile: str | None = None) -> boto3.Session:
    """Create a boto3 session.

    Args:
        region: The region for the session.
        profile: The profile for the session.

    Raises:
        AuthFailure: The profile does not exist.

    """
    if profile:
        LOGGER.debug(
            'building session using profile "%s" in region "%s"',
            profile,
            region or "default",
        )
    else:
        LOGGER.debug('building session in region "%s"', region or "default")
    try:
        return boto3.Session(region_name=region, profile_name=profile)
    except botocore.exceptions.ProfileNotFound as err:
        raise AuthFailure(str(err)) from err
