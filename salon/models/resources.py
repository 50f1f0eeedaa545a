"""Typed records for the tenant-scoped collections."""
import copy
import enum


class ClientStatus(enum.Enum):
    NEW = 'nouvelle'
    REGULAR = 'reguliere'
    VIP = 'vip'


class PaymentMethod(enum.Enum):
    CASH = 'especes'
    MOBILE_MONEY = 'mobile_money'
    CARD = 'carte'
    MIXED = 'mixte'


class AppointmentStatus(enum.Enum):
    CONFIRMED = 'confirme'
    PENDING = 'en_attente'
    CANCELLED = 'annule'
    DONE = 'termine'


class Record:
    """
    Base for JSON-backed records.

    Subclasses declare `fields` as (name, default) pairs; `id` is always
    first and is assigned once by the repository.
    """

    fields = (('id', None),)

    def __init__(self, **values):
        for name, default in self.fields:
            setattr(self, name, values.pop(name, copy.copy(default)))
        if values:
            raise TypeError(f"{type(self).__name__} got unexpected fields: {sorted(values)}")

    def to_dict(self):
        return {name: getattr(self, name) for name, _ in self.fields}

    @classmethod
    def from_dict(cls, data):
        known = {name for name, _ in cls.fields}
        return cls(**{k: v for k, v in data.items() if k in known})

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"<{type(self).__name__}(id='{self.id}')>"


class Client(Record):
    fields = (
        ('id', None),
        ('name', ''),
        ('phone', ''),
        ('registered_on', None),
        ('birthday', None),
        ('status', ClientStatus.NEW.value),
        ('notes', None),
        ('loyalty_points', 0),
        ('total_spent', 0),
        ('visit_count', 0),
        ('last_visit', None),
        ('referrer_id', None),
        ('referrals', []),
    )


class ServiceType(Record):
    """Catalog entry (type de prestation)."""
    fields = (
        ('id', None),
        ('name', ''),
        ('price', 0),
        ('description', None),
        ('category', None),
    )


class ServiceRecord(Record):
    """A service performed for a client (prestation)."""
    fields = (
        ('id', None),
        ('client_id', None),
        ('service_type_id', None),
        ('date', None),
        ('employee', None),
        ('notes', None),
        ('amount', 0),
    )


class Product(Record):
    fields = (
        ('id', None),
        ('name', ''),
        ('category', ''),
        ('price', 0),
        ('purchase_price', 0),
        ('quantity', 0),
        ('alert_threshold', 0),
        ('description', None),
        ('unit', ''),
    )


class SaleItem(Record):
    """Sale line; reference_id points at a product or service type."""
    fields = (
        ('type', 'produit'),
        ('reference_id', None),
        ('name', ''),
        ('quantity', 1),
        ('unit_price', 0),
        ('amount', 0),
    )

    def __repr__(self):
        return f"<SaleItem(type='{self.type}', reference_id='{self.reference_id}')>"


class Sale(Record):
    fields = (
        ('id', None),
        ('date', None),
        ('client_id', None),
        ('items', []),
        ('total_amount', 0),
        ('payment_method', PaymentMethod.CASH.value),
        ('notes', None),
    )

    def __init__(self, **values):
        super().__init__(**values)
        self.items = [i if isinstance(i, SaleItem) else SaleItem.from_dict(i) for i in self.items]

    def to_dict(self):
        data = super().to_dict()
        data['items'] = [i.to_dict() for i in self.items]
        return data


class Expense(Record):
    fields = (
        ('id', None),
        ('date', None),
        ('category', ''),
        ('description', ''),
        ('amount', 0),
    )


class Appointment(Record):
    """Rendez-vous; date is YYYY-MM-DD, time is HH:MM, duration in minutes."""
    fields = (
        ('id', None),
        ('client_id', None),
        ('service_type_id', None),
        ('date', None),
        ('time', None),
        ('duration', 60),
        ('employee', None),
        ('notes', None),
        ('status', AppointmentStatus.PENDING.value),
    )


class LoyaltyConfig(Record):
    """Punch-card rule: visits_required visits earn discount_percent off."""
    fields = (
        ('visits_required', 5),
        ('discount_percent', 10),
        ('vip_visits', 10),
    )

    def __repr__(self):
        return f"<LoyaltyConfig(visits_required={self.visits_required})>"


class SalonProfile(Record):
    """The salon's own settings (one document per tenant, not a list)."""
    fields = (
        ('id', None),
        ('name', 'Mon Salon de Beauté'),
        ('logo', None),
        ('phone', '+237 6XX XXX XXX'),
        ('address', None),
        ('loyalty', None),
        ('inactivity_reminder_days', 30),
        ('follow_up_reminder_days', 21),
    )

    def __init__(self, **values):
        super().__init__(**values)
        if not isinstance(self.loyalty, LoyaltyConfig):
            self.loyalty = LoyaltyConfig.from_dict(self.loyalty or {})

    def to_dict(self):
        data = super().to_dict()
        data['loyalty'] = self.loyalty.to_dict()
        return data
