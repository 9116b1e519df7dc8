import logging

from django.apps import AppConfig, apps
from django.conf import settings

logger = logging.getLogger(__name__)


class CatalogConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'catalog'

    repository = None

    def ready(self):
        from .repository import CatalogRepository
        from .seed import seed_defaults

        self.repository = CatalogRepository()
        if settings.CATALOG_SEED_DEFAULTS:
            seed_defaults(self.repository)
            logger.info(
                f"Catalog seeded with {len(self.repository.reasoners)} reasoners "
                f"and {len(self.repository.scenarios)} scenarios."
            )


def get_repository():
    """Returns the process-wide repository built when the catalog app started."""
    return apps.get_app_config('catalog').repository
