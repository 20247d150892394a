"""
Cross-worker relay of theme-change notifications.

The change channel is process-local. A relay subscribed to it forwards each
notification to a channels group so consumers in other workers can tell
their clients to re-render::

    relay = ChannelLayerRelay()
    relay.attach()

Consumers in the group receive ``{"type": "theme_change", "event": "themeChange"}``
and handle it with a ``theme_change`` method.
"""

import logging
from typing import Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from .bridge import Subscription, ThemeChangeChannel, get_theme_channel
from .config import get_config

logger = logging.getLogger(__name__)


class ChannelLayerRelay:
    def __init__(
        self,
        group: Optional[str] = None,
        channel: Optional[ThemeChangeChannel] = None,
        channel_layer=None,
    ):
        self.group = group or get_config().get("broadcast_group")
        self.channel = channel or get_theme_channel()
        self._channel_layer = channel_layer
        self._subscription: Optional[Subscription] = None

    @property
    def attached(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def attach(self) -> None:
        if not self.attached:
            self._subscription = self.channel.subscribe(self.forward)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.release()
            self._subscription = None

    def message(self) -> dict:
        return {"type": "theme_change", "event": self.channel.name}

    def _layer(self):
        layer = self._channel_layer or get_channel_layer()
        if layer is None:
            logger.warning("No channel layer configured; theme change not relayed")
        return layer

    def forward(self) -> None:
        layer = self._layer()
        if layer is not None:
            async_to_sync(layer.group_send)(self.group, self.message())

    async def aforward(self) -> None:
        """Async version of :meth:`forward`."""
        layer = self._layer()
        if layer is not None:
            await layer.group_send(self.group, self.message())
