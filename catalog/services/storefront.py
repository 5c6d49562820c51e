import logging
import time

import requests
from bs4 import BeautifulSoup
from django.conf import settings

from catalog.exceptions import DetailPageError
from catalog.services.pool import RateLimiter, backoff_delay

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)

DESCRIPTION_SELECTOR = '.description'
DEFAULT_RATING = 'BR0'
SHORT_DESCRIPTION_LENGTH = 160


class StorefrontClient:
    """Accès HTTP à la vitrine : liste de produits, pages détail, images."""

    def __init__(self, session=None, limiter=None, timeout=None, max_retries=None, sleep=time.sleep):
        if session is None:
            session = requests.Session()
            session.headers.update({'User-Agent': USER_AGENT})
        self.session = session
        self.limiter = limiter or RateLimiter(settings.POPULATE_RATE)
        self.timeout = settings.POPULATE_HTTP_TIMEOUT if timeout is None else timeout
        self.max_retries = settings.POPULATE_MAX_RETRIES if max_retries is None else max_retries
        self._sleep = sleep

    def _get(self, url, **kwargs):
        for attempt in range(self.max_retries + 1):
            self.limiter.acquire()
            response = self.session.get(url, timeout=self.timeout, **kwargs)

            if response.status_code == 429 and attempt < self.max_retries:
                delay = backoff_delay(attempt, response.headers.get('Retry-After'))
                logger.warning("⏳ Rate limit (429) sur %s, pause de %.1fs (essai %d/%d)",
                               url, delay, attempt + 1, self.max_retries + 1)
                self._sleep(delay)
                continue

            response.raise_for_status()
            return response

    def fetch_listings(self, params):
        """ Une page de la liste. Les paramètres de l'appelant sont transmis tels quels. """
        query = {'mediaType': 'game', **params}
        response = self._get(settings.POPULATE_LISTING_URL, params=query)
        products = response.json().get('products') or []
        logger.info("📥 %d produits reçus (page %s)", len(products), query.get('page'))
        return products

    def fetch_game_info(self, slug):
        response = self._get(settings.POPULATE_DETAIL_URL.format(slug=slug))
        soup = BeautifulSoup(response.text, 'html.parser')

        description = soup.select_one(DESCRIPTION_SELECTOR)
        if description is None:
            raise DetailPageError(f"Bloc {DESCRIPTION_SELECTOR} introuvable pour {slug}")

        return {
            'rating': DEFAULT_RATING,
            'short_description': description.get_text().strip()[:SHORT_DESCRIPTION_LENGTH],
            'description': description.decode_contents(),
        }

    def download(self, url):
        return self._get(url).content
