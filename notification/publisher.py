from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.utils.module_loading import import_string

from campusmart.conf import app_setting


def user_group(user_id):
    # every websocket connection of a user joins this group (see consumers.py)
    return f"user_{user_id}"


class ChannelLayerPublisher:
    """Pushes new notification entries to the user's open websocket connections."""

    def __init__(self, channel_layer=None):
        self.channel_layer = channel_layer or get_channel_layer()

    def notify(self, user_id, entry):
        if self.channel_layer is None:
            return
        async_to_sync(self.channel_layer.group_send)(
            user_group(user_id),
            {
                "type": "send_notification",  # Handler method name in consumer
                "data": {
                    "event": "new_notification",
                    "notification": entry,
                },
            },
        )


def get_publisher():
    """Build the configured publisher, or None when push is switched off."""
    path = app_setting("NOTIFICATION_PUBLISHER")
    if not path:
        return None
    return import_string(path)()
