"""Domain events for the StoreSettings aggregate."""

from protean.fields import DateTime, Identifier, Text

from ordering.domain import ordering


@ordering.event(part_of="StoreSettings")
class StoreSettingsUpdated:
    """Business hours or delivery rules changed; cached slots are stale."""

    __version__ = 1

    settings_id: Identifier(required=True)
    business_hours: Text(required=True)
    delivery_settings: Text(required=True)
    updated_at: DateTime(required=True)
