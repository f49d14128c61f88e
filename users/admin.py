from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import Achievement, Education, Follow, User


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'name', 'is_staff', 'onboarding_status', 'email_verified', 'trust_points')
    list_filter = ('onboarding_status', 'is_staff', 'is_superuser', 'email_verified', 'is_active')
    search_fields = ('username', 'email', 'name', 'slug')
    fieldsets = UserAdmin.fieldsets + (
        ('Profile', {'fields': ('name', 'slug', 'headline', 'about', 'image', 'skills')}),
        ('Platform', {'fields': ('onboarding_status', 'email_verified', 'trust_points')}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Profile', {'fields': ('email', 'name')}),
    )


@admin.register(Education)
class EducationAdmin(admin.ModelAdmin):
    list_display = ('user', 'institution', 'degree', 'start_year', 'end_year')
    search_fields = ('institution', 'user__email')


@admin.register(Achievement)
class AchievementAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'category', 'created_at')
    list_filter = ('category',)
    search_fields = ('title', 'user__email')


@admin.register(Follow)
class FollowAdmin(admin.ModelAdmin):
    list_display = ('follower', 'following', 'created_at')
