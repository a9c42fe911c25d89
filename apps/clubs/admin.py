from django.contrib import admin
from django.utils.html import format_html
from .models import Club, ArchivedClub, ClubStatus


@admin.register(Club)
class ClubAdmin(admin.ModelAdmin):
    """
    Admin interface for Clubs.

    Provides bag inspection including:
    - Club listing with status badge
    - Filtering by status, source and type
    - Spec fields grouped by head and shaft
    """

    list_display = [
        'club_type',
        'brand',
        'model',
        'user',
        'status_badge',
        'source',
        'final_grade',
        'added_to_bag_at',
    ]

    list_filter = [
        'status',
        'source',
        'club_type',
        'added_to_bag_at',
    ]

    search_fields = [
        'club_type',
        'brand',
        'model',
        'user__email',
        'test_session_id',
    ]

    readonly_fields = [
        'test_session_id',
        'archived_at',
        'created_at',
        'updated_at',
    ]

    date_hierarchy = 'added_to_bag_at'
    ordering = ['user', 'added_to_bag_at']

    fieldsets = (
        ('Club', {
            'fields': (
                'user',
                'club_type',
                'brand',
                'model',
                'year',
            )
        }),
        ('Head', {
            'fields': ('loft', 'lie', 'length')
        }),
        ('Shaft', {
            'fields': (
                'shaft_brand',
                'shaft_model',
                'shaft_flex',
                'shaft_weight',
                'shaft_kickpoint',
                'shaft_torque',
            )
        }),
        ('Bag State', {
            'fields': (
                'status',
                'source',
                'test_session_id',
                'final_grade',
                'added_to_bag_at',
                'archived_at',
            )
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def status_badge(self, obj):
        """Display club status as colored badge."""
        if obj.status == ClubStatus.ACTIVE:
            bg, fg = '#6B8E5E', 'white'
        else:
            bg, fg = '#E5C49A', '#2C1810'
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('user')


@admin.register(ArchivedClub)
class ArchivedClubAdmin(admin.ModelAdmin):
    """Read-only view of archive snapshots."""

    list_display = [
        'get_club_label',
        'user',
        'archived_reason',
        'time_in_bag',
        'can_restore',
        'archived_at',
    ]

    list_filter = [
        'archived_reason',
        'can_restore',
        'archived_at',
    ]

    search_fields = [
        'user__email',
        'club__brand',
        'club__model',
        'club__club_type',
    ]

    readonly_fields = [
        'club',
        'user',
        'club_data',
        'archived_at',
        'archived_reason',
        'replaced_by',
        'change_record',
        'time_in_bag',
        'final_grade',
        'can_restore',
        'created_at',
        'updated_at',
    ]

    date_hierarchy = 'archived_at'
    ordering = ['-archived_at']

    def get_club_label(self, obj):
        data = obj.club_data or {}
        return f"{data.get('brand', '')} {data.get('model', '')} {data.get('club_type', '')}".strip()
    get_club_label.short_description = 'Club'

    def has_add_permission(self, request):
        """Disable manual creation - snapshots are written by replacements."""
        return False

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'club', 'replaced_by', 'change_record')
