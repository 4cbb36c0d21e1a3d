"""Store settings: the single admin-managed record of contact details,
business hours and delivery booking rules.

Business hours and delivery settings are stored as JSON documents, keyed by
lower-case weekday name and by snake_case setting name respectively.
"""

import json
from datetime import date, datetime

import structlog
from protean import handle, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.delivery.events import StoreSettingsUpdated
from ordering.delivery.slots import WEEKDAYS, DeliveryConfig, parse_time
from ordering.domain import ordering
from shared.cache import get_cache

logger = structlog.get_logger(__name__)

DEFAULT_BUSINESS_HOURS = {
    "monday": {"is_open": True, "open_time": "09:00", "close_time": "17:00"},
    "tuesday": {"is_open": True, "open_time": "09:00", "close_time": "17:00"},
    "wednesday": {"is_open": True, "open_time": "09:00", "close_time": "17:00"},
    "thursday": {"is_open": True, "open_time": "09:00", "close_time": "17:00"},
    "friday": {"is_open": True, "open_time": "09:00", "close_time": "17:00"},
    "saturday": {"is_open": True, "open_time": "10:00", "close_time": "22:00"},
    "sunday": {"is_open": False, "open_time": "09:00", "close_time": "17:00"},
}

SETTINGS_ID = "admin_settings"

DEFAULT_DELIVERY_SETTINGS = {
    "enabled": True,
    "slot_duration_minutes": 120,
    "advance_notice_hours": 24,
    "max_days_in_advance": 7,
    "unavailable_dates": [],
}


@ordering.aggregate
class StoreSettings:
    admin_email = String(max_length=254, default="admin@pourhouse.test")
    phone_number = String(max_length=30)
    enable_email_notifications = Boolean(default=True)
    enable_sms_notifications = Boolean(default=False)
    notification_email = String(max_length=254)
    profile_image = String(max_length=500)
    display_name = String(max_length=100, default="Admin User")
    business_hours = Text(required=True)  # JSON object keyed by weekday
    delivery_settings = Text(required=True)  # JSON object
    updated_at = DateTime()

    @invariant.post
    def business_hours_cover_every_weekday(self):
        hours = json.loads(self.business_hours or "{}")
        missing = [day for day in WEEKDAYS if day not in hours]
        if missing:
            raise ValidationError({"business_hours": [f"Missing hours for {', '.join(missing)}"]})

        for day in WEEKDAYS:
            try:
                opens = parse_time(hours[day]["open_time"])
                closes = parse_time(hours[day]["close_time"])
            except (KeyError, TypeError, ValueError):
                raise ValidationError({"business_hours": [f"Invalid opening hours for {day}"]}) from None
            if hours[day].get("is_open") and opens >= closes:
                raise ValidationError({"business_hours": [f"Closing time must be after opening time on {day}"]})

    @invariant.post
    def delivery_rules_must_be_sane(self):
        rules = json.loads(self.delivery_settings or "{}")
        for name in ("slot_duration_minutes", "advance_notice_hours", "max_days_in_advance"):
            try:
                int(rules.get(name, 0))
            except (TypeError, ValueError):
                raise ValidationError({"delivery_settings": [f"{name} must be a whole number"]}) from None

        if int(rules.get("slot_duration_minutes", 0)) <= 0:
            raise ValidationError({"delivery_settings": ["Slot duration must be positive"]})
        if int(rules.get("advance_notice_hours", 0)) < 0:
            raise ValidationError({"delivery_settings": ["Advance notice cannot be negative"]})
        if int(rules.get("max_days_in_advance", 0)) < 0:
            raise ValidationError({"delivery_settings": ["Booking window cannot be negative"]})
        for value in rules.get("unavailable_dates", []):
            try:
                date.fromisoformat(value)
            except (TypeError, ValueError):
                raise ValidationError({"delivery_settings": [f"Invalid unavailable date {value!r}"]}) from None

    @classmethod
    def create_default(cls):
        return cls(
            id=SETTINGS_ID,
            business_hours=json.dumps(DEFAULT_BUSINESS_HOURS),
            delivery_settings=json.dumps(DEFAULT_DELIVERY_SETTINGS),
            updated_at=datetime.now(),
        )

    def delivery_config(self) -> DeliveryConfig:
        return DeliveryConfig.from_dicts(json.loads(self.business_hours), json.loads(self.delivery_settings))

    def update(self, business_hours=None, delivery_settings=None, **contact):
        """Apply a partial update. Delivery settings merge into the stored ones."""
        for field, value in contact.items():
            if value is not None:
                setattr(self, field, value)

        if business_hours is not None:
            hours = json.loads(self.business_hours)
            hours.update(business_hours)
            self.business_hours = json.dumps(hours)
        if delivery_settings is not None:
            rules = json.loads(self.delivery_settings)
            rules.update(delivery_settings)
            self.delivery_settings = json.dumps(rules)

        self.updated_at = datetime.now()
        self.raise_(
            StoreSettingsUpdated(
                settings_id=str(self.id),
                business_hours=self.business_hours,
                delivery_settings=self.delivery_settings,
                updated_at=self.updated_at,
            )
        )

    def reset(self):
        self.update(business_hours=DEFAULT_BUSINESS_HOURS, delivery_settings=DEFAULT_DELIVERY_SETTINGS)

    def to_summary(self) -> dict:
        return {
            "settings_id": str(self.id),
            "admin_email": self.admin_email,
            "phone_number": self.phone_number,
            "enable_email_notifications": self.enable_email_notifications,
            "enable_sms_notifications": self.enable_sms_notifications,
            "notification_email": self.notification_email,
            "profile_image": self.profile_image,
            "display_name": self.display_name,
            "business_hours": json.loads(self.business_hours),
            "delivery_settings": json.loads(self.delivery_settings),
        }


def load_store_settings() -> StoreSettings | None:
    """Return the settings record, or None when it has not been initialised."""
    results = current_domain.repository_for(StoreSettings)._dao.query.limit(1).all().items
    return results[0] if results else None


def _json_object(field, raw):
    """Decode a partial settings document sent as JSON text."""
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError({field: ["Must be valid JSON"]}) from None
    if not isinstance(value, dict):
        raise ValidationError({field: ["Must be a JSON object"]})
    return value


@ordering.command(part_of="StoreSettings")
class InitializeStoreSettings:
    """Create the default settings record if none exists yet."""

    requested_by = Identifier()


@ordering.command(part_of="StoreSettings")
class UpdateStoreSettings:
    admin_email = String(max_length=254)
    phone_number = String(max_length=30)
    enable_email_notifications = Boolean()
    enable_sms_notifications = Boolean()
    notification_email = String(max_length=254)
    profile_image = String(max_length=500)
    display_name = String(max_length=100)
    business_hours = Text()  # JSON, may name only the weekdays being changed
    delivery_settings = Text()  # JSON, may name only the settings being changed


@ordering.command(part_of="StoreSettings")
class ResetStoreSettings:
    requested_by = Identifier()


@ordering.command_handler(part_of=StoreSettings)
class StoreSettingsCommandHandler:
    @handle(InitializeStoreSettings)
    def initialize(self, command):
        existing = load_store_settings()
        if existing is not None:
            return str(existing.id)

        settings = StoreSettings.create_default()
        current_domain.repository_for(StoreSettings).add(settings)
        get_cache().clear_delivery_slots()
        logger.info("Store settings initialised", settings_id=str(settings.id))
        return str(settings.id)

    @handle(UpdateStoreSettings)
    def update_settings(self, command):
        settings = self._load_or_create()
        settings.update(
            business_hours=_json_object("business_hours", command.business_hours),
            delivery_settings=_json_object("delivery_settings", command.delivery_settings),
            admin_email=command.admin_email,
            phone_number=command.phone_number,
            enable_email_notifications=command.enable_email_notifications,
            enable_sms_notifications=command.enable_sms_notifications,
            notification_email=command.notification_email,
            profile_image=command.profile_image,
            display_name=command.display_name,
        )
        current_domain.repository_for(StoreSettings).add(settings)
        get_cache().clear_delivery_slots()
        logger.info("Store settings updated", settings_id=str(settings.id))
        return str(settings.id)

    @handle(ResetStoreSettings)
    def reset_settings(self, command):
        settings = self._load_or_create()
        settings.reset()
        current_domain.repository_for(StoreSettings).add(settings)
        get_cache().clear_delivery_slots()
        logger.info("Store settings reset to defaults", settings_id=str(settings.id))
        return str(settings.id)

    def _load_or_create(self):
        return load_store_settings() or StoreSettings.create_default()
