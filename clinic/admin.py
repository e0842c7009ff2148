"""
Django admin registrations for the clinic models.

Administrators created by ``seed_users`` can sign in at ``/admin/`` to
inspect accounts, appointments and the audit trail.
"""

from django.contrib import admin

from .models import (
    Appointment,
    AuditEvent,
    Message,
    Record,
    RecordDocument,
    User,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'role', 'department', 'is_approved', 'is_active', 'created_at')
    list_filter = ('role', 'is_approved', 'is_active', 'department')
    search_fields = ('email', 'name', 'phone')
    exclude = ('password',)


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'appointment_date', 'appointment_time', 'status')
    list_filter = ('status', 'department')
    search_fields = ('patient__email', 'doctor__email', 'reason')


class RecordDocumentInline(admin.TabularInline):
    model = RecordDocument
    extra = 0


@admin.register(Record)
class RecordAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'visit_date', 'diagnosis')
    search_fields = ('patient__email', 'doctor__email', 'diagnosis')
    inlines = [RecordDocumentInline]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('id', 'sender', 'receiver', 'is_read', 'created_at')
    list_filter = ('is_read',)
    search_fields = ('sender__email', 'receiver__email')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'action', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('action', 'object_id', 'user__email')
