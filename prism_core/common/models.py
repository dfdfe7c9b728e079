# prism_core/common/models.py
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models


class TimeStampedModel(models.Model):
    """
    Standard timestamps for all entities.
    """
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class LockableModel(TimeStampedModel):
    """
    Lock flag shared by acceptance, results and morphology rows.
    A locked row only accepts writes from an administrator.
    """
    locked = models.BooleanField(default=False, db_index=True)

    class Meta:
        abstract = True


class LockProvenanceModel(LockableModel):
    """
    Lockable row that also remembers when and by which role it was locked.
    """
    locked_at = models.DateTimeField(null=True, blank=True)
    locked_by = models.CharField(max_length=32, blank=True, default="")

    class Meta:
        abstract = True


class AppendOnlyModel(models.Model):
    """
    Immutable history row: insert once, never update or delete.
    """
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError(f"{type(self).__name__} is immutable and cannot be modified once created.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(f"{type(self).__name__} is immutable and cannot be deleted.")
