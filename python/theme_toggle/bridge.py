"""
Shared theme state for independently mounted toggle controls.

Pieces:

- ``ThemeCell`` holds the current theme and notifies its own subscribers.
- ``CellRegistry`` hands out one cell per stable key, so every control of a
  page works on the same cell. Keys are per page or client, never global:
  two visitors must not share a cell.
- ``ThemeChangeChannel`` is a process-wide publish/subscribe channel for the
  payload-less "theme changed" notification, for listeners that do not hold
  the cell (e.g. ChannelLayerRelay).
- ``ToggleBridge`` is what a control uses: mount-time correction of a
  'system' value and the toggle action.

Example::

    store = PreferenceStore(SessionPreferenceBackend(request.session))
    bridge = ToggleBridge(get_request_theme_cell(request, store), store, resolver)
    bridge.mount()
    variant = bridge.variant  # "Light" / "Dark"
    bridge.toggle()
"""

import itertools
import logging
from threading import RLock
from typing import Callable, Dict, Hashable, Optional

from django.dispatch import Signal

from .config import get_config
from .document import ThemeDocument
from .resolver import ThemeResolver
from .store import PreferenceStore
from .themes import Theme

logger = logging.getLogger(__name__)


class Subscription:
    """Handle returned by ``subscribe``; ``release()`` stops notifications."""

    def __init__(self, release: Callable[[], None]):
        self._release = release
        self.active = True

    def release(self) -> None:
        if self.active:
            self.active = False
            self._release()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.release()


class ThemeCell:
    """A reactive holder for the current theme."""

    def __init__(self, value: Theme = Theme.SYSTEM):
        self._value = Theme(value)
        self._subscribers: Dict[int, Callable[[Theme], None]] = {}
        self._ids = itertools.count()
        self._lock = RLock()

    @property
    def value(self) -> Theme:
        return self._value

    def set(self, value) -> None:
        theme = Theme(value)
        with self._lock:
            if theme is self._value:
                return
            self._value = theme
            subscribers = list(self._subscribers.values())
        for callback in subscribers:
            callback(theme)

    def subscribe(self, callback: Callable[[Theme], None]) -> Subscription:
        with self._lock:
            sub_id = next(self._ids)
            self._subscribers[sub_id] = callback

        def release():
            with self._lock:
                self._subscribers.pop(sub_id, None)

        return Subscription(release)

    def __repr__(self) -> str:
        return f"ThemeCell({self._value.value!r})"


class CellRegistry:
    """Explicit registry of shared cells keyed by a stable identifier."""

    def __init__(self):
        self._cells: Dict[Hashable, ThemeCell] = {}
        self._lock = RLock()

    def get_or_create(self, key: Hashable, factory: Callable[[], ThemeCell]) -> ThemeCell:
        with self._lock:
            cell = self._cells.get(key)
            if cell is None:
                cell = factory()
                self._cells[key] = cell
            return cell

    def remove(self, key: Hashable) -> Optional[ThemeCell]:
        with self._lock:
            return self._cells.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._cells.clear()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._cells

    def __len__(self) -> int:
        with self._lock:
            return len(self._cells)


class ThemeChangeChannel:
    """
    Publish/subscribe channel for the theme-change notification.

    Built on a Django ``Signal``; receivers are held strongly and identified
    by a per-subscription dispatch uid, so a released handle disconnects
    exactly its own callback.
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or get_config().get("change_event")
        self._signal = Signal()
        self._ids = itertools.count()

    def subscribe(self, callback: Callable[[], None]) -> Subscription:
        dispatch_uid = f"{self.name}:{next(self._ids)}"

        def receiver(sender, **kwargs):
            callback()

        self._signal.connect(receiver, weak=False, dispatch_uid=dispatch_uid)
        return Subscription(lambda: self._signal.disconnect(dispatch_uid=dispatch_uid))

    def publish(self) -> int:
        """Notify every subscriber. Returns the number notified."""
        responses = self._signal.send_robust(sender=self.__class__)
        for receiver, response in responses:
            if isinstance(response, Exception):
                logger.error(
                    "Theme change subscriber failed on %s: %s", self.name, response,
                    exc_info=(type(response), response, response.__traceback__),
                )
        return len(responses)

    @property
    def subscriber_count(self) -> int:
        return len(self._signal.receivers)


_cells = CellRegistry()
_channel: Optional[ThemeChangeChannel] = None


def get_cell_registry() -> CellRegistry:
    return _cells


def get_theme_cell(store: PreferenceStore, scope: Hashable) -> ThemeCell:
    """
    Return the cell shared under ``scope``, seeding it from ``store`` once.

    ``scope`` must identify a single page or client, such as a websocket
    channel name; visitors never share a scope. Cells live until removed from
    the registry, so prefer :func:`get_request_theme_cell` for plain requests.
    """
    return _cells.get_or_create((scope, store.key), lambda: ThemeCell(store.read()))


def get_request_theme_cell(request, store: PreferenceStore) -> ThemeCell:
    """Return the cell shared by every control mounted while handling ``request``."""
    registry = getattr(request, "_theme_cells", None)
    if registry is None:
        registry = CellRegistry()
        request._theme_cells = registry
    return registry.get_or_create(store.key, lambda: ThemeCell(store.read()))


def get_theme_channel() -> ThemeChangeChannel:
    """Get the process-wide change channel."""
    global _channel
    if _channel is None:
        _channel = ThemeChangeChannel()
    return _channel


def reset_theme_state() -> None:
    """Drop all shared cells and the channel (useful for testing)."""
    global _channel
    _cells.clear()
    _channel = None


class ToggleBridge:
    """
    Connects one mounted toggle control to the shared cell and store.

    ``document`` is optional: when given, the toggle also re-marks its root
    and body elements.
    """

    def __init__(
        self,
        cell: ThemeCell,
        store: PreferenceStore,
        resolver: ThemeResolver,
        channel: Optional[ThemeChangeChannel] = None,
        document: Optional[ThemeDocument] = None,
        attribute: Optional[str] = None,
    ):
        self.cell = cell
        self.store = store
        self.resolver = resolver
        self.channel = channel or get_theme_channel()
        self.document = document
        self.attribute = attribute or get_config().get("attribute")
        self._mounted = False

    @property
    def theme(self) -> Theme:
        return self.cell.value

    @property
    def variant(self) -> str:
        return "Light" if self.cell.value is Theme.LIGHT else "Dark"

    def mount(self) -> Theme:
        """Resolve a non-concrete cell value once per mount."""
        if self._mounted:
            return self.cell.value
        self._mounted = True
        current = self.cell.value
        if not current.is_concrete:
            effective = self.resolver.resolve_effective(current)
            self.cell.set(effective)
            self.store.write(effective)
            logger.debug("Mount corrected theme %s -> %s", current, effective)
        return self.cell.value

    def toggle(self) -> Theme:
        """Switch light <-> dark, persist it and broadcast the change."""
        current = self.cell.value
        if not current.is_concrete:
            current = self.resolver.resolve_effective(current)
        new_theme = current.opposite()

        self.cell.set(new_theme)
        if self.document is not None:
            self.document.mark(new_theme, self.attribute)
        self.store.write(new_theme)
        self.channel.publish()
        logger.debug("Toggled theme %s -> %s", current, new_theme)
        return new_theme
