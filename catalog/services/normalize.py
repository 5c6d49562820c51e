from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional

IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.webp')


@dataclass
class ListingRecord:
    """Un produit brut de la liste de la vitrine (jamais persisté tel quel)."""
    title: str
    slug: str
    price_amount: Optional[str] = None
    release_timestamp: Optional[str] = None
    genres: list = field(default_factory=list)
    operating_systems: list = field(default_factory=list)
    developer: Optional[str] = None
    publisher: Optional[str] = None
    image: Optional[str] = None
    gallery: list = field(default_factory=list)


def parse_listing(product):
    # 'title' est obligatoire : un produit sans titre fait échouer le batch
    price = product.get('price') or {}
    return ListingRecord(
        title=product['title'],
        slug=product.get('slug') or '',
        price_amount=price.get('amount'),
        release_timestamp=product.get('globalReleaseDate'),
        genres=list(product.get('genres') or []),
        operating_systems=list(product.get('supportedOperatingSystems') or []),
        developer=product.get('developer'),
        publisher=product.get('publisher'),
        image=product.get('image'),
        gallery=list(product.get('gallery') or []),
    )


def game_slug(slug):
    return slug.replace('_', '-')


def release_date(timestamp):
    """ Timestamp UNIX (secondes, str ou nombre) -> datetime UTC. 0 donne l'epoch. """
    try:
        seconds = int(float(timestamp))
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def price(amount):
    if amount is None or amount == '':
        return None
    try:
        return Decimal(str(amount))
    except InvalidOperation:
        return None


def image_url(ref):
    """ '//images.gog-statics.com/abc' -> 'https://images.gog-statics.com/abc.jpg' """
    if ref.startswith('//'):
        url = f"https:{ref}"
    elif ref.startswith(('http://', 'https://')):
        url = ref
    else:
        url = f"https://{ref.lstrip('/')}"

    if not url.lower().endswith(IMAGE_EXTENSIONS):
        url = f"{url}.jpg"
    return url


def game_fields(listing):
    return {
        'name': listing.title,
        'slug': game_slug(listing.slug),
        'price': price(listing.price_amount),
        'release_date': release_date(listing.release_timestamp),
    }
