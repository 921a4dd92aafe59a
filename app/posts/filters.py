import django_filters as filters

from posts.models import Reply


class ReplyFilter(filters.FilterSet):
    record_id = filters.UUIDFilter(field_name="record_id")
    ask_id = filters.UUIDFilter(field_name="ask_id")

    class Meta:
        model = Reply
        fields = ["record_id", "ask_id"]
