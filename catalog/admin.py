from django.contrib import admin
from .models import Category, Developer, GalleryImage, Game, Platform, Publisher, UploadFailure


class GalleryImageInline(admin.TabularInline):
    model = GalleryImage
    extra = 0


@admin.register(Game)
class GameAdmin(admin.ModelAdmin):
    # Recherche par nom OU slug (deux jeux peuvent avoir le même slug)
    search_fields = ['name', 'slug']
    list_display = ('name', 'slug', 'price', 'release_date', 'rating', 'publisher')
    list_filter = ('rating', 'platforms', 'categories')
    filter_horizontal = ('categories', 'platforms', 'developers')
    inlines = [GalleryImageInline]


class TaxonomyAdmin(admin.ModelAdmin):
    search_fields = ('name',)
    list_display = ('name', 'slug', 'count_games')

    def count_games(self, obj):
        return obj.games.count()
    count_games.short_description = "Jeux"


for model in (Developer, Publisher, Category, Platform):
    admin.site.register(model, TaxonomyAdmin)


@admin.register(UploadFailure)
class UploadFailureAdmin(admin.ModelAdmin):
    list_display = ('game', 'field', 'image', 'replayed', 'resolved', 'created_at')
    list_filter = ('field', 'replayed', 'resolved')
    search_fields = ('game__name', 'image')


admin.site.site_header = "Catalogue Administration"
admin.site.site_title = "Catalogue Portal"
