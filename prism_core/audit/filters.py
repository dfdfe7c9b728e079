# prism_core/audit/filters.py
import django_filters as df

from prism_core.audit.models import UnlockEvent
from prism_core.common.labs import LAB_CHOICES


class UnlockEventFilter(df.FilterSet):
    lab_kind = df.ChoiceFilter(choices=LAB_CHOICES)
    target_table = df.ChoiceFilter(choices=UnlockEvent.TARGET_CHOICES)
    record_number = df.CharFilter(field_name="record_number", lookup_expr="exact")

    class Meta:
        model = UnlockEvent
        fields = ["lab_kind", "target_table", "record_number"]
