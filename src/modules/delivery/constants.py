from django.db import models


class DeliveryMethodType(models.TextChoices):
    STANDARD = "STANDARD", "Standard"
    EXPRESS = "EXPRESS", "Express"
    COOL = "COOL", "Cool"
    MAIL = "MAIL", "Mail"
