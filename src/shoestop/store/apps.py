from django.apps import AppConfig


class StoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "shoestop.store"
    label = "store"
    verbose_name = "Store"
