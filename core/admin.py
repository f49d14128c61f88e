from django.contrib import admin

from .models import ContactMessage, Feedback


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'created_at')
    search_fields = ('name', 'email', 'message')
    list_filter = ('created_at',)


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ('user', 'rating', 'email', 'created_at')
    list_filter = ('rating', 'created_at')
    search_fields = ('message', 'email', 'name')
