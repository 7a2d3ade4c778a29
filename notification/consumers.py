from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .publisher import user_group


class NotificationConsumer(AsyncJsonWebsocketConsumer):  # live notification feed for one user
    async def connect(self):
        user = self.scope["user"]  # set by JWTAuthMiddleware

        if user.is_anonymous:
            await self.close()
            return
        # every websocket connection is added to a group based on user id
        self.group_name = user_group(user.id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def send_notification(self, event):  # Handler for ChannelLayerPublisher messages
        await self.send_json(event["data"])
