# backoffice/services/notification_service.py
from kombu.exceptions import OperationalError as BrokerError

from backoffice.celery_worker import celery_app
from backoffice.utils.retry import broker_retry
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień.
    Używa Celery do asynchronicznego przetwarzania.

    Powiadomienia ida po commit transakcji - blad kolejki jest logowany,
    ale nie cofa juz zapisanego zamowienia.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int) -> bool:
        return _dispatch(send_order_notification_task, user_id, order_id)

    @staticmethod
    def send_order_cancelled_notification(user_id: int, order_id: int) -> bool:
        return _dispatch(send_order_cancelled_task, user_id, order_id)


@broker_retry()
def _enqueue(task, user_id: int, order_id: int):
    return task.delay(user_id, order_id)


def _dispatch(task, user_id: int, order_id: int) -> bool:
    try:
        _enqueue(task, user_id, order_id)
        return True
    except BrokerError as e:
        logger.error(f"Failed to enqueue {task.name} for order {order_id}: {e}")
        return False


@celery_app.task(name="backoffice.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    """
    Celery task - w prawdziwym systemie wysłałby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} has been placed")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="backoffice.services.notification_service.send_order_cancelled_task")
def send_order_cancelled_task(user_id: int, order_id: int):
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} has been cancelled")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
