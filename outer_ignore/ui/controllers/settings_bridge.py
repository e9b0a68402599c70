"""Subscription handles over the ignore settings change broadcast."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from outer_ignore.ignore_settings import IgnoreSettings
from outer_ignore.logging_setup import get_logger

logger = get_logger(__name__)

SettingsListener = Callable[[str, Any], None]

_token_ids = itertools.count(1)


@dataclass(eq=False)
class SettingsSubscription:
    listener: SettingsListener
    token_id: int = field(default_factory=lambda: next(_token_ids))
    active: bool = True
    _slot: Callable[[str, Any], None] | None = field(default=None, repr=False)


class SettingsBridge:
    """
    Hands out one subscription token per listener.

    Every token owns its own slot on ``IgnoreSettings.settingChanged`` so a
    listener fires once per change, and unsubscribing one token never touches
    another.
    """

    def __init__(self, settings: IgnoreSettings) -> None:
        self._settings = settings
        self._subscriptions: dict[int, SettingsSubscription] = {}

    @property
    def settings(self) -> IgnoreSettings:
        return self._settings

    def get_flag(self) -> bool:
        return self._settings.is_outer_ignore_rules()

    def subscribe(self, listener: SettingsListener) -> SettingsSubscription:
        subscription = SettingsSubscription(listener=listener)

        def _deliver(key: str, value: Any) -> None:
            if subscription.active:
                listener(key, value)

        subscription._slot = _deliver
        self._settings.settingChanged.connect(_deliver)
        self._subscriptions[subscription.token_id] = subscription
        return subscription

    def unsubscribe(self, subscription: SettingsSubscription) -> bool:
        if not subscription.active or self._subscriptions.pop(subscription.token_id, None) is None:
            return False
        subscription.active = False
        slot, subscription._slot = subscription._slot, None
        if slot is not None:
            self._settings.settingChanged.disconnect(slot)
        return True

    def active_count(self) -> int:
        return len(self._subscriptions)

    def close(self) -> None:
        for subscription in list(self._subscriptions.values()):
            self.unsubscribe(subscription)
        logger.debug("Settings bridge closed")
