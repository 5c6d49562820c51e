from django.conf import settings
from django.core.management.base import BaseCommand
from catalog.services.media import FailureLog, MediaUploader, replay_failures
from catalog.services.storefront import StorefrontClient

class Command(BaseCommand):
    help = 'Rejoue UNE fois les uploads d\'images ratés lors des imports précédents'

    def add_arguments(self, parser):
        parser.add_argument('--limit', type=int, default=None, help='Nombre max d\'échecs rejoués')

    def handle(self, *args, **options):
        failures = FailureLog.pending(limit=options['limit'])
        total = len(failures)

        if total == 0:
            self.stdout.write(self.style.SUCCESS("✅ Aucun upload en échec à rejouer."))
            return

        self.stdout.write(f"🔁 {total} uploads en échec détectés. Rejeu...")

        storefront = StorefrontClient()
        # Les échecs du rejeu ne sont pas réenregistrés
        uploader = MediaUploader(storefront, FailureLog(persist=False))
        recovered = replay_failures(uploader, failures, settings.POPULATE_WORKERS)

        style = self.style.SUCCESS if recovered == total else self.style.WARNING
        self.stdout.write(style(f"🎉 Terminé ! {recovered}/{total} uploads rattrapés."))
