import pytest
import requests

from catalog.exceptions import DetailPageError


@pytest.fixture(autouse=True)
def populate_settings(settings, tmp_path):
    settings.POPULATE_WORKERS = 1
    settings.POPULATE_RATE = 0
    settings.POPULATE_UPLOAD_TOKEN = ''
    settings.POPULATE_UPLOAD_URL = 'http://testserver/api/upload'
    settings.MEDIA_ROOT = str(tmp_path / 'media')
    return settings


class FakeResponse:
    def __init__(self, status_code=200, text='', content=b'', json_data=None, headers=None):
        self.status_code = status_code
        self.text = text
        self.content = content
        self.headers = headers or {}
        self._json = json_data

    def json(self):
        if self._json is None:
            raise ValueError('No JSON')
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} Error', response=self)


class FakeSession:
    """Rejoue des réponses préparées et garde la trace des appels."""

    def __init__(self, get_responses=(), post_responses=()):
        self.get_responses = list(get_responses)
        self.post_responses = list(post_responses)
        self.gets = []
        self.posts = []

    def get(self, url, **kwargs):
        self.gets.append((url, kwargs))
        return self.get_responses.pop(0)

    def post(self, url, **kwargs):
        self.posts.append((url, kwargs))
        if self.post_responses:
            return self.post_responses.pop(0)
        return FakeResponse(status_code=201, json_data=[])


class FakeStorefront:
    timeout = 5

    def __init__(self, products=(), broken_pages=(), broken_images=()):
        self.products = list(products)
        self.broken_pages = set(broken_pages)
        self.broken_images = set(broken_images)
        self.listing_calls = []
        self.info_calls = []
        self.downloads = []

    def fetch_listings(self, params):
        self.listing_calls.append(params)
        return self.products

    def fetch_game_info(self, slug):
        self.info_calls.append(slug)
        if slug in self.broken_pages:
            raise DetailPageError(f'.description missing for {slug}')
        return {
            'rating': 'BR0',
            'short_description': f'About {slug}',
            'description': f'<p>About <b>{slug}</b></p>',
        }

    def download(self, url):
        self.downloads.append(url)
        if any(broken in url for broken in self.broken_images):
            raise requests.ConnectionError(f'cannot reach {url}')
        return b'\xff\xd8\xff\xe0fake-jpeg'


def product(title, **overrides):
    slug = title.lower().replace(' ', '_')
    data = {
        'title': title,
        'slug': slug,
        'price': {'amount': '9.99'},
        'globalReleaseDate': '1420070400',
        'genres': ['Action', 'RPG'],
        'supportedOperatingSystems': ['windows', 'linux'],
        'developer': 'Studio One',
        'publisher': 'Big Publisher',
        'image': f'//images.example.com/{slug}',
        'gallery': [f'//images.example.com/{slug}_shot{i}' for i in range(3)],
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def make_storefront():
    return FakeStorefront


@pytest.fixture
def make_product():
    return product
