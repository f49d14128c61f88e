from django.contrib import admin

from .models import HackTeam, HackTeamMember, HackTeamRequest


class HackTeamMemberInline(admin.TabularInline):
    model = HackTeamMember
    extra = 0


@admin.register(HackTeam)
class HackTeamAdmin(admin.ModelAdmin):
    list_display = ('name', 'hack_name', 'owner', 'status', 'size', 'spots_left', 'created_at')
    list_filter = ('status', 'hack_mode')
    search_fields = ('name', 'hack_name', 'team_lead_email')
    inlines = [HackTeamMemberInline]


@admin.register(HackTeamRequest)
class HackTeamRequestAdmin(admin.ModelAdmin):
    list_display = ('team', 'type', 'sender', 'receiver', 'status', 'created_at')
    list_filter = ('type', 'status')
    search_fields = ('team__name', 'sender__email')
