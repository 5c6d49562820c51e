import logging
import threading

from django.conf import settings
from django.db import transaction

from catalog.models import Game
from catalog.services.normalize import game_fields
from catalog.services.pool import run_in_pool
from catalog.services.relations import RelationResolver

logger = logging.getLogger(__name__)


class GameIngestor:
    """
    Crée les jeux absents du catalogue (recherche par nom exact), avec leurs
    relations, puis envoie la jaquette et la galerie.
    Chaque jeu est isolé : une erreur est notée dans `errors` et le batch continue.
    """

    def __init__(self, storefront, uploader, resolver=None, workers=None, gallery_limit=None):
        self.storefront = storefront
        self.uploader = uploader
        self.resolver = resolver or RelationResolver()
        self.locks = self.resolver.locks
        self.workers = settings.POPULATE_WORKERS if workers is None else workers
        self.gallery_limit = settings.POPULATE_GALLERY_LIMIT if gallery_limit is None else gallery_limit
        self.skipped = []
        self.errors = []
        self._lock = threading.Lock()

    def ingest(self, listings):
        results = run_in_pool(self._ingest_isolated, listings, self.workers)
        return [game for game in results if game is not None]

    def _ingest_isolated(self, listing):
        try:
            return self.ingest_one(listing)
        except Exception as e:
            logger.error("❌ Erreur sur %s : %s", listing.title, e)
            with self._lock:
                self.errors.append((listing.title, e))
            return None

    def ingest_one(self, listing):
        with self.locks.lock_for('game', listing.title):
            if Game.objects.filter(name=listing.title).exists():
                logger.info("⏩ Déjà présent : %s", listing.title)
                with self._lock:
                    self.skipped.append(listing.title)
                return None

            logger.info("🎮 Création : %s...", listing.title)
            game = self.create_game(listing)

        self.upload_images(listing, game)
        return game

    def create_game(self, listing):
        categories = self.resolver.resolve_many(listing.genres, 'category')
        platforms = self.resolver.resolve_many(listing.operating_systems, 'platform')
        developers = self.resolver.resolve_many([listing.developer], 'developer')
        publisher = self.resolver.resolve(listing.publisher, 'publisher')

        info = self.storefront.fetch_game_info(listing.slug)

        with transaction.atomic():
            game = Game.objects.create(publisher=publisher, **game_fields(listing), **info)
            game.categories.set(categories)
            game.platforms.set(platforms)
            game.developers.set(developers)
        return game

    def upload_images(self, listing, game):
        if listing.image:
            self.uploader.upload(listing.image, game, 'cover')
        for image in listing.gallery[:self.gallery_limit]:
            self.uploader.upload(image, game, 'gallery')
