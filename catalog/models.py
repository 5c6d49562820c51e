from django.db import models


class Taxonomy(models.Model):
    # Recherche par nom exact : "RPG" et "rpg" sont deux entrées distinctes
    name = models.CharField(max_length=255, db_index=True)
    slug = models.SlugField(max_length=255)

    class Meta:
        abstract = True
        ordering = ['name']

    def __str__(self):
        return self.name


class Developer(Taxonomy):
    pass


class Publisher(Taxonomy):
    pass


class Category(Taxonomy):
    class Meta(Taxonomy.Meta):
        verbose_name_plural = 'categories'


class Platform(Taxonomy):
    pass


class Game(models.Model):
    RATING_CHOICES = [
        ('FREE', 'Free'),
        ('BR0', 'All ages'),
        ('BR10', '10+'),
        ('BR12', '12+'),
        ('BR14', '14+'),
        ('BR16', '16+'),
        ('BR18', '18+'),
    ]

    name = models.CharField(max_length=255, db_index=True)
    # Dérivé du slug de la vitrine, pas d'unicité imposée
    slug = models.SlugField(max_length=255)
    price = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    release_date = models.DateTimeField(null=True, blank=True)
    rating = models.CharField(max_length=8, choices=RATING_CHOICES, default='BR0')
    short_description = models.CharField(max_length=160, blank=True)
    description = models.TextField(blank=True)
    cover = models.ImageField(upload_to='covers/', blank=True)

    categories = models.ManyToManyField(Category, blank=True, related_name='games')
    platforms = models.ManyToManyField(Platform, blank=True, related_name='games')
    developers = models.ManyToManyField(Developer, blank=True, related_name='games')
    publisher = models.ForeignKey(
        Publisher, null=True, blank=True, on_delete=models.SET_NULL, related_name='games'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name


class GalleryImage(models.Model):
    game = models.ForeignKey(Game, on_delete=models.CASCADE, related_name='gallery')
    image = models.ImageField(upload_to='gallery/')
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.game} #{self.position}"


class UploadFailure(models.Model):
    """Journal des uploads d'images ratés, rejouable après un crash."""
    game = models.ForeignKey(Game, on_delete=models.CASCADE, related_name='upload_failures')
    image = models.CharField(max_length=500)
    field = models.CharField(max_length=32)
    error = models.TextField(blank=True)
    replayed = models.BooleanField(default=False, db_index=True)
    resolved = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    replayed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.game} ({self.field}) - {self.image}"
