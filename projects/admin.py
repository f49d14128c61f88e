from django.contrib import admin

from .models import Project, ProjectMember, ProjectRequest


class ProjectMemberInline(admin.TabularInline):
    model = ProjectMember
    extra = 0


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ('title', 'owner', 'stage', 'commitment', 'status', 'is_open', 'current_members')
    list_filter = ('status', 'stage', 'commitment', 'is_open')
    search_fields = ('title', 'short_desc', 'contact_email')
    inlines = [ProjectMemberInline]


@admin.register(ProjectRequest)
class ProjectRequestAdmin(admin.ModelAdmin):
    list_display = ('project', 'type', 'sender', 'receiver', 'status', 'created_at')
    list_filter = ('type', 'status')
    search_fields = ('project__title', 'sender__email')
