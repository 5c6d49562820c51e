import requests
from django.core.management.base import BaseCommand, CommandError
from catalog.services.populate import populate

class Command(BaseCommand):
    help = 'Importe UNE page de la vitrine : jeux, taxonomies, jaquettes et galeries'

    def add_arguments(self, parser):
        parser.add_argument('--page', type=int, default=1, help='Page de la liste (défaut: 1)')
        parser.add_argument('--sort', default='popularity', help='Clé de tri (défaut: popularity)')
        parser.add_argument(
            '--limit',
            type=int,
            default=None,
            help='Nombre max de produits traités (défaut: POPULATE_LIMIT)'
        )
        parser.add_argument(
            '--param',
            action='append',
            default=[],
            metavar='KEY=VALUE',
            help='Paramètre supplémentaire transmis à la vitrine (répétable)'
        )
        parser.add_argument(
            '--prime-relations',
            action='store_true',
            help='Crée toutes les taxonomies du batch avant les jeux.',
        )

    def handle(self, *args, **options):
        params = {'sort': options['sort'], 'page': str(options['page'])}
        for raw in options['param']:
            key, sep, value = raw.partition('=')
            if not sep or not key:
                raise CommandError(f"Paramètre invalide : '{raw}' (attendu KEY=VALUE)")
            params[key] = value

        self.stdout.write(f"🚀 Démarrage import vitrine (Page : {params['page']} | Tri : {params['sort']})")

        try:
            report = populate(params, limit=options['limit'], prime_relations=options['prime_relations'])
        except requests.RequestException as e:
            raise CommandError(f"❌ Erreur API vitrine : {e}")

        for game in report.created:
            self.stdout.write(f"   ✅ Créé : {game.name}")
        for title in report.skipped:
            self.stdout.write(f"   ⏩ Déjà présent : {title}")
        for title, error in report.errors:
            self.stdout.write(self.style.ERROR(f"   ❌ Erreur sur {title}: {error}"))

        if report.failures:
            lost = report.failures - report.replayed
            style = self.style.WARNING if lost else self.style.SUCCESS
            self.stdout.write(style(f"🔁 Uploads rejoués : {report.replayed}/{report.failures} rattrapés"))

        self.stdout.write(self.style.SUCCESS(
            f"🎉 Terminé : {len(report.created)} jeux créés sur {report.fetched} produits."
        ))
