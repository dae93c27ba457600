# backoffice/celery_worker.py
from celery import Celery

from backoffice.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "backoffice",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAŻNE: Explicite importuj taski, żeby Celery je zarejestrował
celery_app.conf.imports = (
    "backoffice.services.notification_service",
)

celery_app.conf.timezone = "UTC"

# w testach taski wykonuja sie lokalnie, bez brokera
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
