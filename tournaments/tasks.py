from celery import shared_task

from .models import BOTH
from .recalculation import RecalculationService


@shared_task(bind=True)
def recalculate_tournaments(self, mode=BOTH, category=None):
    result = RecalculationService().recalculate_all(mode=mode, category=category)
    return result.to_dict()
