from django.contrib import admin

from .models import Dispatch


@admin.register(Dispatch)
class DispatchAdmin(admin.ModelAdmin):
    list_display = ("dispatch_date", "dispatch_time", "customer_name", "activity", "reservation", "tenant")
    list_filter = ("dispatch_date",)
    search_fields = ("customer_name", "notes")
