"""
Channel Resolver

Maps a signer's notification and double-authentication selectors to
the wire channel enums, along with the contact details they imply.
"""

from dataclasses import dataclass
from typing import Optional

from .enums import AuthenticationChannel, NotificationChannel
from .types import NotificationKind, Signer


@dataclass(frozen=True)
class ResolvedChannels:
    """
    Channel selection for one member.

    email/phone start from the signer's identity and are overwritten
    by whatever the selected channels carry.
    """
    notification_channel: NotificationChannel
    authentication_channel: Optional[AuthenticationChannel]
    email: str
    phone: Optional[str]


def resolve_channels(signer: Signer) -> ResolvedChannels:
    email = signer.email
    phone = signer.phone

    notification = signer.notification
    if notification is not None and notification.kind == NotificationKind.EMAIL:
        notification_channel = NotificationChannel.EMAIL
        email = notification.address
    else:
        notification_channel = NotificationChannel.NONE

    # Absent authentication stays unset; it is omitted from the payload
    auth = signer.double_authentication
    authentication_channel = None
    if auth is not None:
        authentication_channel = auth.channel
        if auth.channel == AuthenticationChannel.EMAIL:
            email = auth.contact
        else:
            phone = auth.contact

    return ResolvedChannels(
        notification_channel=notification_channel,
        authentication_channel=authentication_channel,
        email=email,
        phone=phone
    )
