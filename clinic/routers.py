"""
URL mappings for the MediBook API.

All endpoints live under ``/api/`` and trailing slashes are deliberately
omitted so paths match the front-end client verbatim.
"""
from django.urls import path

from .views import appointments, approvals, health, messages, records, users
from .views.auth import login_view, profile_view, register_view


urlpatterns = [
    path('api/health', health.healthz),
    # Authentication
    path('api/auth/register', register_view),
    path('api/auth/login', login_view),
    path('api/auth/profile', profile_view),
    # Appointments
    path('api/appointments', appointments.appointments),
    path('api/appointments/all', appointments.all_appointments),
    path('api/appointments/<int:appointment_id>/status', appointments.update_appointment_status),
    # Admin: dashboard and doctor approval
    path('api/admin/stats', approvals.admin_stats),
    path('api/admin/doctors', approvals.all_doctors),
    path('api/admin/doctors/pending', approvals.pending_doctors),
    path('api/admin/doctors/<int:doctor_id>/approve', approvals.approve),
    path('api/admin/doctors/<int:doctor_id>/reject', approvals.reject),
    # Directory and medical records
    path('api/users/doctors', users.doctor_list),
    path('api/users/patients', users.patient_list),
    path('api/users/stats', users.user_stats),
    path('api/users/records', records.records),
    path('api/users/records/<int:patient_id>', records.patient_records),
    path('api/users/records/<int:record_id>/upload', records.upload_document),
    # Messages; "conversations" must precede the per-user thread
    path('api/messages', messages.send_message),
    path('api/messages/conversations', messages.conversations),
    path('api/messages/<int:user_id>', messages.thread),
    path('api/messages/<int:user_id>/read', messages.mark_read),
]
