import logging
from dataclasses import dataclass, field

from django.conf import settings

from catalog.services.ingest import GameIngestor
from catalog.services.media import MediaUploader, replay_failures
from catalog.services.normalize import parse_listing
from catalog.services.relations import RelationResolver
from catalog.services.storefront import StorefrontClient

logger = logging.getLogger(__name__)

DEFAULT_PARAMS = {'sort': 'popularity', 'page': '1'}


@dataclass
class PopulateReport:
    fetched: int = 0
    created: list = field(default_factory=list)
    skipped: list = field(default_factory=list)
    errors: list = field(default_factory=list)
    failures: int = 0
    replayed: int = 0


def populate(params=None, storefront=None, uploader=None, limit=None, prime_relations=False):
    """
    Un batch : une page de la vitrine, plafonnée à `limit` produits,
    puis création des jeux et rejeu des uploads ratés.
    Pas de boucle sur les pages : l'appelant choisit `page`.
    """
    options = {**DEFAULT_PARAMS, **(params or {})}
    limit = settings.POPULATE_LIMIT if limit is None else limit
    storefront = storefront or StorefrontClient()
    uploader = uploader or MediaUploader(storefront)

    products = storefront.fetch_listings(options)[:limit]
    listings = [parse_listing(product) for product in products]
    report = PopulateReport(fetched=len(listings))

    resolver = RelationResolver()
    if prime_relations:
        counts = resolver.prime(listings)
        logger.info("🏷️ Taxonomies prêtes : %s", counts)

    ingestor = GameIngestor(storefront, uploader, resolver)
    # Un uploader réutilisé garde les échecs des batchs précédents
    start = len(uploader.failures)
    report.created = ingestor.ingest(listings)
    report.skipped = ingestor.skipped
    report.errors = ingestor.errors
    report.failures = len(uploader.failures) - start

    if report.failures:
        logger.info("🔧 %d upload(s) en échec, rejeu...", report.failures)
        report.replayed = replay_failures(uploader, uploader.failures, ingestor.workers, start=start)

    logger.info("✅ %d créés, %d déjà présents, %d erreurs, %d/%d uploads rattrapés",
                len(report.created), len(report.skipped), len(report.errors),
                report.replayed, report.failures)
    return report
