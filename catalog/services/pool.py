import threading
import time
from concurrent.futures import ThreadPoolExecutor

from django.db import connection


def run_in_pool(fn, items, workers=1):
    """
    Applique `fn` à chaque élément avec au plus `workers` threads.
    Les résultats sont rendus dans l'ordre des éléments.
    Avec workers <= 1 tout tourne dans le thread appelant.
    """
    items = list(items)
    if workers <= 1 or len(items) <= 1:
        return [fn(item) for item in items]

    def task(item):
        try:
            return fn(item)
        finally:
            # Chaque thread ouvre sa propre connexion DB
            connection.close()

    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(task, items))


class KeyedLock:
    """Un verrou par clé, ex: ('developer', 'CD PROJEKT RED')."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = {}

    def lock_for(self, *key):
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())

    def __len__(self):
        return len(self._locks)


class RateLimiter:
    """
    Token bucket : `rate` requêtes par seconde, rafale de `burst`.
    rate <= 0 désactive la limite.
    """

    def __init__(self, rate, burst=1, clock=time.monotonic, sleep=time.sleep):
        self.rate = rate
        self.capacity = max(1, burst)
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(self.capacity)
        self._updated = clock()
        self._lock = threading.Lock()

    def acquire(self):
        """Réserve un jeton et attend si besoin. Retourne l'attente en secondes."""
        if self.rate <= 0:
            return 0.0

        with self._lock:
            now = self._clock()
            self._tokens = min(self.capacity, self._tokens + (now - self._updated) * self.rate)
            self._updated = now
            # Solde négatif = jetons déjà réservés par d'autres threads
            self._tokens -= 1
            wait = 0.0 if self._tokens >= 0 else -self._tokens / self.rate

        if wait:
            self._sleep(wait)
        return wait


def backoff_delay(attempt, retry_after=None, base=1.0):
    """ Délai avant la prochaine tentative après un 429 """
    if retry_after is not None:
        try:
            return max(0.0, float(retry_after))
        except (TypeError, ValueError):
            pass
    return base * (2 ** attempt)
