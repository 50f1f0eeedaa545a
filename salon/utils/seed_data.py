"""Starting data for a salon's first run (returned until something is saved)."""
from salon.models.resources import ServiceType
from salon.services.tenant_keys import StorageKeys

# (id, name, price FCFA, description, category)
DEFAULT_SERVICE_TYPES = [
    ('1', 'Coiffure simple', 5000, 'Coiffure de base', 'Coiffure'),
    ('2', 'Tresses africaines', 15000, 'Tresses traditionnelles', 'Tresses'),
    ('3', 'Tissage', 25000, 'Pose de tissage complet', 'Coiffure'),
    ('4', 'Défrisage', 8000, 'Défrisage cheveux', 'Traitement'),
    ('5', 'Manucure', 3000, 'Soin des ongles mains', 'Ongles'),
    ('6', 'Pédicure', 4000, 'Soin des ongles pieds', 'Ongles'),
    ('7', 'Maquillage événement', 20000, 'Maquillage pour occasion spéciale', 'Maquillage'),
    ('8', 'Soin du visage', 10000, 'Nettoyage et hydratation', 'Soins'),
    ('9', 'Massage relaxant', 15000, 'Massage corps complet 1h', 'Massage'),
    ('11', 'Hamam traditionnel', 12000, 'Bain vapeur + gommage', 'Hamam'),
    ('13', 'Coupe homme', 3000, 'Coupe classique ou tendance', 'Homme'),
    ('21', 'Barbe & rasage', 2000, 'Taille et rasage professionnel', 'Homme'),
]


def default_service_types():
    return [
        ServiceType(id=id, name=name, price=price, description=description, category=category)
        for id, name, price, description, category in DEFAULT_SERVICE_TYPES
    ]


def default_fallbacks():
    """Resource -> factory of first-run items. Unlisted resources start empty."""
    return {
        StorageKeys.TYPES_PRESTATIONS: default_service_types,
    }
