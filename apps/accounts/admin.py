from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _
from .models import User, UserProfile


# USER PROFILE INLINE (Edit preferences inside user form)
class UserProfileInline(admin.StackedInline):

    model = UserProfile

    # OneToOne relationship
    can_delete = False
    verbose_name = _('User Profile')
    verbose_name_plural = _('User Profile')

    fk_name = "user"
    extra = 0
    max_num = 1

    fields = ('theme', 'timezone', 'preferences')


# CUSTOM USER ADMIN
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'first_name', 'last_name', 'is_active', 'is_staff', 'date_joined')
    list_display_links = ('email',)
    list_filter = ('is_active', 'is_staff', 'is_superuser', 'date_joined')
    search_fields = ('email', 'first_name', 'last_name')
    ordering = ('-date_joined',)

    # No username field: login is by email
    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('Personal info'), {'fields': ('first_name', 'last_name')}),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Important dates'), {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ('last_login', 'date_joined')
    inlines = [UserProfileInline]


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'theme', 'timezone', 'updated_at')
    list_filter = ('theme',)
    search_fields = ('user__email',)
    readonly_fields = ('created_at', 'updated_at')
