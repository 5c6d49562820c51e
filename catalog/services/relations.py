import logging

from django.utils.text import slugify

from catalog.models import Category, Developer, Platform, Publisher
from catalog.services.pool import KeyedLock

logger = logging.getLogger(__name__)

TAXONOMY_MODELS = {
    'developer': Developer,
    'publisher': Publisher,
    'category': Category,
    'platform': Platform,
}


def taxonomy_model(kind):
    try:
        return TAXONOMY_MODELS[kind]
    except KeyError:
        raise ValueError(f"Type de taxonomie inconnu : {kind}") from None


class RelationResolver:
    """
    Cherche ou crée les taxonomies (développeur, éditeur, catégorie, plateforme)
    par nom exact. Le couple recherche/création est protégé par un verrou
    par (type, nom) pour toute la durée du batch.
    """

    def __init__(self, locks=None):
        self.locks = locks or KeyedLock()

    def get_by_name(self, name, kind):
        return taxonomy_model(kind).objects.filter(name=name).first()

    def resolve(self, name, kind):
        model = taxonomy_model(kind)
        if name is None or not str(name).strip():
            return None
        name = str(name)

        with self.locks.lock_for(kind, name):
            item = model.objects.filter(name=name).first()
            if item is None:
                item = model.objects.create(name=name, slug=slugify(name))
                logger.info("➕ %s créé : %s", kind, name)
            return item

    def resolve_many(self, names, kind):
        items = (self.resolve(name, kind) for name in names or [])
        return [item for item in items if item is not None]

    def prime(self, listings):
        """ Crée en amont toutes les taxonomies d'un batch (dédoublonnées par nom) """
        names = {kind: {} for kind in TAXONOMY_MODELS}
        for listing in listings:
            names['developer'][listing.developer] = None
            names['publisher'][listing.publisher] = None
            names['category'].update(dict.fromkeys(listing.genres))
            names['platform'].update(dict.fromkeys(listing.operating_systems))

        return {kind: len(self.resolve_many(list(found), kind)) for kind, found in names.items()}
