from django.contrib import admin

from .models import TrustLog


@admin.register(TrustLog)
class TrustLogAdmin(admin.ModelAdmin):
    list_display = ("user", "amount", "reason", "unit_label", "unit_id", "created_at")
    list_filter = ("reason", "unit_label")
    search_fields = ("user__email", "user__username")
