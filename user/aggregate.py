"""
Per-user read-modify-write for the embedded wishlist and notification arrays.

``locked_user`` opens a transaction, locks the user row with
``select_for_update`` and saves only the named fields when the block exits
cleanly. Two writers touching the same user are serialized by the lock;
writers on different users never wait on each other.

SQLite has no row locks. There the write lock is claimed with a no-op
update before the row is read, and a lock conflict is retried a few times
with a growing pause before the error is raised.
"""
import logging
import time
from contextlib import ExitStack, contextmanager

from django.db import OperationalError, connection, transaction
from django.db.models import F
from rest_framework.exceptions import NotFound

from .models import User

logger = logging.getLogger(__name__)

LOCK_ATTEMPTS = 10
LOCK_RETRY_DELAY = 0.05


def _lock_row(user_id):
    if not connection.features.has_select_for_update:
        User.objects.filter(pk=user_id).update(is_active=F("is_active"))
    try:
        return User.objects.select_for_update().get(pk=user_id)
    except User.DoesNotExist:
        raise NotFound("User not found")


def _acquire(user_id):
    """Return the locked user and the open transaction holding the lock."""
    for attempt in range(1, LOCK_ATTEMPTS + 1):
        try:
            with ExitStack() as stack:
                stack.enter_context(transaction.atomic())
                user = _lock_row(user_id)
                held = stack.pop_all()
        except OperationalError:
            if attempt == LOCK_ATTEMPTS:
                raise
            logger.warning("User %s is locked, retrying (%s/%s)", user_id, attempt, LOCK_ATTEMPTS)
            time.sleep(LOCK_RETRY_DELAY * attempt)
        else:
            return user, held


@contextmanager
def locked_user(user_id, fields):
    user, held = _acquire(user_id)
    with held:
        yield user
        user.save(update_fields=list(fields))


def load_user(user_id, *fields):
    """Read-only fetch of a user, optionally deferring everything but ``fields``."""
    qs = User.objects.all()
    if fields:
        qs = qs.only("id", *fields)
    try:
        return qs.get(pk=user_id)
    except User.DoesNotExist:
        raise NotFound("User not found")
