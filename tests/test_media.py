"""Tests for image uploads, failure tracking and replay."""

from unittest.mock import MagicMock, patch

import pytest
from django.db import DataError

from catalog.models import Game, UploadFailure
from catalog.services.media import FailureLog, MediaUploader, replay_failures
from catalog.services.pool import RateLimiter

pytestmark = pytest.mark.django_db


@pytest.fixture
def game():
    return Game.objects.create(name='Hades', slug='hades')


def uploader_for(storefront, session, failures=None, **kwargs):
    return MediaUploader(storefront, failures, session=session, limiter=RateLimiter(0), **kwargs)


class TestUpload:

    def test_posts_multipart_form(self, settings, game, make_storefront, make_session):
        storefront = make_storefront()
        session = make_session()

        ok = uploader_for(storefront, session).upload('//images.example.com/hades', game, 'cover')

        assert ok is True
        assert storefront.downloads == ['https://images.example.com/hades.jpg']
        url, kwargs = session.posts[0]
        assert url == settings.POPULATE_UPLOAD_URL
        assert kwargs['data'] == {'refId': game.pk, 'ref': 'catalog.game', 'field': 'cover'}
        assert kwargs['files'] == {'files': ('hades.jpg', b'\xff\xd8\xff\xe0fake-jpeg', 'image/jpeg')}
        assert kwargs['headers'] == {}

    def test_sends_bearer_token(self, game, make_storefront, make_session):
        session = make_session()
        uploader_for(make_storefront(), session, token='s3cret').upload('//img/x', game, 'gallery')

        assert session.posts[0][1]['headers'] == {'Authorization': 'Bearer s3cret'}

    def test_download_error_is_recorded_not_raised(self, game, make_storefront, make_session):
        failures = FailureLog()
        session = make_session()
        uploader = uploader_for(make_storefront(broken_images={'dead'}), session, failures)

        assert uploader.upload('//img/dead', game, 'gallery') is False

        [record] = failures.records
        assert (record.game, record.image, record.field) == (game, '//img/dead', 'gallery')
        assert session.posts == []

    def test_rejected_upload_is_recorded(self, game, make_storefront, make_session, make_response):
        failures = FailureLog()
        session = make_session(post_responses=[make_response(status_code=413, text='Too large')])

        assert uploader_for(make_storefront(), session, failures).upload('//img/x', game) is False
        assert len(failures) == 1

    def test_unrecorded_failure(self, game, make_storefront, make_session):
        failures = FailureLog()
        uploader = uploader_for(make_storefront(broken_images={'dead'}), make_session(), failures)

        assert uploader.upload('//img/dead', game, record=False) is False
        assert len(failures) == 0


    def test_journal_error_keeps_failure_in_memory(self, game, make_storefront, make_session):
        failures = FailureLog(persist=True)
        uploader = uploader_for(make_storefront(broken_images={'dead'}), make_session(), failures)

        with patch('catalog.models.UploadFailure.objects.create', side_effect=DataError('value too long')):
            assert uploader.upload('//img/dead', game, 'gallery') is False

        [record] = failures.records
        assert (record.image, record.field, record.entry_id) == ('//img/dead', 'gallery', None)

class TestFailureLog:

    def test_persists_each_failure(self, game):
        log = FailureLog(persist=True)
        record = log.add(game, '//img/a', 'cover', ConnectionError('reset'))

        entry = UploadFailure.objects.get(pk=record.entry_id)
        assert (entry.game, entry.image, entry.field) == (game, '//img/a', 'cover')
        assert entry.error == 'reset'
        assert not entry.replayed

    def test_memory_only(self, game):
        log = FailureLog(persist=False)
        record = log.add(game, '//img/a', 'cover')

        assert record.entry_id is None
        assert UploadFailure.objects.count() == 0
        assert len(log) == 1

    def test_pending_reloads_unreplayed(self, game):
        UploadFailure.objects.create(game=game, image='//img/a', field='cover')
        UploadFailure.objects.create(game=game, image='//img/b', field='gallery', replayed=True)

        pending = FailureLog.pending()

        assert [(r.image, r.field) for r in pending] == [('//img/a', 'cover')]
        assert pending.persist is False


class TestReplay:

    def test_one_attempt_per_failure(self, game):
        failures = FailureLog(persist=False)
        failures.add(game, '//img/a', 'cover')
        failures.add(game, '//img/b', 'gallery')
        uploader = MagicMock()
        uploader.upload.return_value = True

        recovered = replay_failures(uploader, failures)

        assert recovered == 2
        assert [c.args for c in uploader.upload.call_args_list] == [
            ('//img/a', game, 'cover'),
            ('//img/b', game, 'gallery'),
        ]
        assert all(c.kwargs == {'record': False} for c in uploader.upload.call_args_list)

    def test_replay_failures_are_not_collected_again(self, game, make_storefront, make_session):
        failures = FailureLog()
        uploader = uploader_for(make_storefront(broken_images={'dead'}), make_session(), failures)
        uploader.upload('//img/dead', game, 'cover')
        assert len(failures) == 1

        recovered = replay_failures(uploader, failures)

        assert recovered == 0
        assert len(failures) == 1
        entry = UploadFailure.objects.get()
        assert entry.replayed and not entry.resolved
        assert entry.replayed_at is not None

    def test_successful_replay_is_resolved(self, game, make_storefront, make_session):
        storefront = make_storefront(broken_images={'flaky'})
        failures = FailureLog()
        uploader = uploader_for(storefront, make_session(), failures)
        uploader.upload('//img/flaky', game, 'gallery')

        storefront.broken_images.clear()
        assert replay_failures(uploader, failures) == 1
        assert UploadFailure.objects.get().resolved is True
