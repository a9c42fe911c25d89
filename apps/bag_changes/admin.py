from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html
from .models import ChangeRecord


@admin.register(ChangeRecord)
class ChangeRecordAdmin(admin.ModelAdmin):
    """
    Admin interface for the bag change ledger.

    Records are written by the bag update service, so everything is
    read-only here apart from closing the undo window early.
    """

    list_display = [
        'user',
        'change_type',
        'set_type',
        'get_grade_change',
        'undo_state_badge',
        'undo_expires_at',
        'created_at',
    ]

    list_filter = [
        'change_type',
        'set_type',
        'undone',
        'can_undo',
        'created_at',
    ]

    search_fields = [
        'user__email',
        'test_session_id',
    ]

    readonly_fields = [
        'user',
        'change_type',
        'triggered_by',
        'test_session_id',
        'is_set_replacement',
        'set_type',
        'user_choice',
        'clubs_added',
        'clubs_removed',
        'grade_impact',
        'can_undo',
        'undo_expires_at',
        'undone',
        'undone_at',
        'created_at',
        'updated_at',
    ]

    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Change', {
            'fields': (
                'user',
                'change_type',
                'user_choice',
                'is_set_replacement',
                'set_type',
                'triggered_by',
                'test_session_id',
            )
        }),
        ('Clubs', {
            'fields': ('clubs_removed', 'clubs_added')
        }),
        ('Grade Impact', {
            'fields': ('grade_impact',),
            'classes': ('collapse',),
        }),
        ('Undo', {
            'fields': (
                'can_undo',
                'undo_expires_at',
                'undone',
                'undone_at',
            )
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def get_grade_change(self, obj):
        impact = obj.grade_impact or {}
        before = impact.get('before_letter_grade') or '?'
        after = impact.get('after_letter_grade') or '?'
        return f"{before} → {after}"
    get_grade_change.short_description = 'Grade'

    def undo_state_badge(self, obj):
        """Display undo state as colored badge."""
        if obj.undone:
            bg, fg, label = '#A47449', 'white', 'Undone'
        elif obj.is_undoable():
            bg, fg, label = '#6B8E5E', 'white', 'Undoable'
        else:
            bg, fg, label = '#E5C49A', '#2C1810', 'Final'
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, label
        )
    undo_state_badge.short_description = 'Undo'

    actions = ['close_undo_window']

    @admin.action(description='Close undo window now')
    def close_undo_window(self, request, queryset):
        """Make selected changes permanent."""
        count = queryset.filter(can_undo=True, undone=False).update(
            can_undo=False,
            updated_at=timezone.now()
        )
        self.message_user(request, f'Closed undo window for {count} change(s).')

    def has_add_permission(self, request):
        """Disable manual creation - changes are written by the service."""
        return False

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('user')
