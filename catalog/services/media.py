import logging
import threading
from dataclasses import dataclass
from typing import Optional

import requests
from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from catalog.exceptions import UploadError
from catalog.models import Game, UploadFailure
from catalog.services.normalize import image_url
from catalog.services.pool import RateLimiter, run_in_pool

logger = logging.getLogger(__name__)

UPLOAD_REF = 'catalog.game'


@dataclass
class FailureRecord:
    game: Game
    image: str
    field: str
    entry_id: Optional[int] = None


class FailureLog:
    """
    Échecs d'upload d'un batch. Gardés en mémoire et, si activé,
    recopiés dans UploadFailure pour survivre à un crash.
    """

    def __init__(self, persist=None):
        self.persist = settings.POPULATE_PERSIST_FAILURES if persist is None else persist
        self.records = []
        self._lock = threading.Lock()

    def __len__(self):
        return len(self.records)

    def __iter__(self):
        return iter(list(self.records))

    def add(self, game, image, field, error=None):
        record = FailureRecord(game=game, image=image, field=field)
        with self._lock:
            self.records.append(record)

        if self.persist:
            try:
                entry = UploadFailure.objects.create(
                    game=game, image=image, field=field, error=str(error or '')
                )
                record.entry_id = entry.pk
            except DatabaseError as e:
                # L'échec reste rejouable en mémoire, seul le journal est perdu
                logger.warning("⚠️ Échec non journalisé pour %s (%s) : %s", game.slug, field, e)
        return record

    def mark_replayed(self, record, resolved):
        if record.entry_id is None:
            return
        UploadFailure.objects.filter(pk=record.entry_id).update(
            replayed=True, resolved=resolved, replayed_at=timezone.now()
        )

    @classmethod
    def pending(cls, limit=None):
        """ Recharge les échecs persistés qui n'ont jamais été rejoués """
        log = cls(persist=False)
        entries = UploadFailure.objects.filter(replayed=False).select_related('game')
        if limit:
            entries = entries[:limit]
        for entry in entries:
            log.records.append(FailureRecord(entry.game, entry.image, entry.field, entry.pk))
        return log


class MediaUploader:
    """
    Télécharge une image de la vitrine et la renvoie au endpoint d'upload
    du CMS, rattachée au champ `field` du jeu.
    """

    def __init__(self, storefront, failures=None, session=None, upload_url=None, token=None, limiter=None):
        self.storefront = storefront
        self.failures = failures if failures is not None else FailureLog()
        self.session = session or requests.Session()
        self.upload_url = upload_url or settings.POPULATE_UPLOAD_URL
        self.token = settings.POPULATE_UPLOAD_TOKEN if token is None else token
        self.limiter = limiter or RateLimiter(settings.POPULATE_RATE)

    def upload(self, image, game, field='cover', record=True):
        """ True si l'image est en ligne. Aucune exception ne sort d'ici. """
        try:
            self.send(image, game, field)
            return True
        except Exception as e:
            logger.warning("⚠️ Upload %s raté pour %s : %s", field, game.slug, e)
            if record:
                self.failures.add(game, image, field, e)
            return False

    def send(self, image, game, field):
        # Octets envoyés tels que reçus (binaire brut)
        data = self.storefront.download(image_url(image))
        filename = f"{game.slug}.jpg"

        headers = {'Authorization': f'Bearer {self.token}'} if self.token else {}
        logger.info("📤 Upload image %s : %s", field, filename)

        self.limiter.acquire()
        response = self.session.post(
            self.upload_url,
            data={'refId': game.pk, 'ref': UPLOAD_REF, 'field': field},
            files={'files': (filename, data, 'image/jpeg')},
            headers=headers,
            timeout=self.storefront.timeout,
        )
        if response.status_code >= 400:
            raise UploadError(f"Upload refusé ({response.status_code}) : {response.text[:200]}")
        return response


def replay_failures(uploader, failures, workers=1, start=0):
    """
    Rejoue une seule fois chaque échec enregistré. Les échecs du rejeu
    ne sont pas réenregistrés. `start` ignore les échecs des batchs précédents.
    Retourne le nombre d'uploads rattrapés.
    """
    records = list(failures)[start:]
    logger.info("🔁 Correction des échecs : %d upload(s) à rejouer", len(records))

    def replay(record):
        logger.info("name: %s, id: %s, type: %s", record.game.name, record.game.pk, record.field)
        ok = uploader.upload(record.image, record.game, record.field, record=False)
        failures.mark_replayed(record, ok)
        return ok

    return sum(run_in_pool(replay, records, workers))
