# views.py
import logging

from django.conf import settings
from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .models import GalleryImage, Game
from .services.media import UPLOAD_REF
from .services.populate import populate

logger = logging.getLogger(__name__)

UPLOAD_FIELDS = ('cover', 'gallery')


def _authorized(request):
    # Pas de jeton configuré = endpoint ouvert (dev local)
    token = settings.POPULATE_UPLOAD_TOKEN
    if not token:
        return True
    return request.headers.get('Authorization') == f'Bearer {token}'


@require_GET
def populate_view(request):
    if not _authorized(request):
        return HttpResponse('Unauthorized', status=401, content_type='text/plain')

    logger.info('Starting to populate...')
    # ?sort=...&page=...&<autres clés> sont passés tels quels à la vitrine
    populate(request.GET.dict())

    return HttpResponse('Finished populating!', content_type='text/plain')


@csrf_exempt
@require_POST
def upload_view(request):
    if not _authorized(request):
        return JsonResponse({'error': 'Unauthorized'}, status=401)

    ref = request.POST.get('ref')
    field = request.POST.get('field')
    files = request.FILES.getlist('files')

    if ref != UPLOAD_REF:
        return JsonResponse({'error': f'Unknown ref: {ref}'}, status=400)
    if field not in UPLOAD_FIELDS:
        return JsonResponse({'error': f'Unknown field: {field}'}, status=400)
    if not files:
        return JsonResponse({'error': 'No files'}, status=400)

    try:
        ref_id = int(request.POST.get('refId'))
    except (TypeError, ValueError):
        return JsonResponse({'error': 'Invalid refId'}, status=400)

    game = Game.objects.filter(pk=ref_id).first()
    if game is None:
        return JsonResponse({'error': f'Game {ref_id} not found'}, status=404)

    stored = []
    for upload in files:
        if field == 'cover':
            game.cover.save(upload.name, upload, save=True)
            stored.append({'id': game.pk, 'name': game.cover.name, 'url': game.cover.url})
        else:
            item = GalleryImage(game=game, position=game.gallery.count())
            item.image.save(upload.name, upload, save=True)
            stored.append({'id': item.pk, 'name': item.image.name, 'url': item.image.url})

    return JsonResponse(stored, safe=False, status=201)
